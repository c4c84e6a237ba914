from __future__ import annotations

from pathlib import Path
import textwrap


def _load():
    from variantgen import config

    return config


def _write(path: Path, text: str) -> Path:
    path.write_text(textwrap.dedent(text).strip() + "\n")
    return path


def test_generator_config_reads_toml(tmp_path: Path) -> None:
    config = _load()
    _write(
        tmp_path / "variantgen.toml",
        """
        [generate]
        directive_tag = "variant"
        runtime_module = "myproject.variants"
        """,
    )
    loaded = config.generator_config(root=tmp_path)
    assert loaded.directive_tag == "variant"
    assert loaded.runtime_module == "myproject.variants"


def test_generator_config_defaults_without_file(tmp_path: Path) -> None:
    config = _load()
    assert config.generator_config(root=tmp_path) == config.GeneratorConfig()
    assert config.generate_defaults(root=tmp_path) == {}


def test_generator_config_ignores_invalid_toml(tmp_path: Path) -> None:
    config = _load()
    path = _write(tmp_path / "broken.toml", "[generate\n")
    assert config.load_config(config_path=path) == {}
    assert config.generator_config(config_path=path) == config.GeneratorConfig()


def test_generator_config_rejects_bad_values(tmp_path: Path) -> None:
    config = _load()
    path = _write(
        tmp_path / "custom.toml",
        """
        [generate]
        directive_tag = "not an identifier"
        runtime_module = "bad..module"
        """,
    )
    loaded = config.generator_config(config_path=path)
    assert loaded.directive_tag == config.DEFAULT_DIRECTIVE_TAG
    assert loaded.runtime_module == config.DEFAULT_RUNTIME_MODULE


def test_generate_section_must_be_a_table(tmp_path: Path) -> None:
    config = _load()
    path = _write(tmp_path / "custom.toml", 'generate = "yes"')
    assert config.generate_defaults(config_path=path) == {}


def test_overrides_win_over_file_values(tmp_path: Path) -> None:
    config = _load()
    path = _write(
        tmp_path / "custom.toml",
        """
        [generate]
        directive_tag = "variant"
        runtime_module = "myproject.variants"
        """,
    )
    loaded = config.generator_config(
        config_path=path,
        overrides={"directive_tag": "adt", "runtime_module": None},
    )
    assert loaded.directive_tag == "adt"
    assert loaded.runtime_module == "myproject.variants"


def test_merge_payload_skips_none() -> None:
    config = _load()
    merged = config.merge_payload({"a": None, "b": 2}, {"a": 1, "c": 3})
    assert merged == {"a": 1, "b": 2, "c": 3}
