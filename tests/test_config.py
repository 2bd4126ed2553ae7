import pytest
from pathlib import Path

from fontmanifest.config import ManifestConfig, load_config
from fontmanifest.constants import FONT_EXTENSIONS, LICENSE_DIRS


FULL_CONFIG = """\
fontsRepo: fonts
manifestRepo: ../manifest
licenses:
  - ofl
  - ufl
extensions:
  - .ttf
manifestName: fonts.properties
remote: upstream
branch: production
manifestRemote: origin
manifestBranch: publish
commitMessage: Regenerate manifest
author:
  name: Manifest Bot
  email: bot@example.com
pull: no
push: true
validateFonts: yes
"""


def test_defaults(tmp_path):
    config = ManifestConfig.from_yaml("fontsRepo: fonts\n", tmp_path)
    assert config.fonts_repo == (tmp_path / "fonts").resolve()
    assert config.manifest_repo is None
    assert config.licenses == list(LICENSE_DIRS)
    assert config.extensions == list(FONT_EXTENSIONS)
    assert config.manifest_name == "metadata.properties"
    assert (config.remote, config.branch) == ("origin", "main")
    assert config.pull and config.push
    assert not config.validate_fonts


def test_full_config_file(tmp_path):
    config_dir = tmp_path / "conf"
    config_dir.mkdir()
    fp = config_dir / "config.yaml"
    fp.write_text(FULL_CONFIG, encoding="utf-8")

    config = ManifestConfig.from_file(fp)
    assert config.fonts_repo == (config_dir / "fonts").resolve()
    assert config.manifest_repo == (tmp_path / "manifest").resolve()
    assert config.out_dir == config.manifest_repo
    assert config.licenses == ["ofl", "ufl"]
    assert config.extensions == [".ttf"]
    assert config.manifest_name == "fonts.properties"
    assert (config.remote, config.branch) == ("upstream", "production")
    assert (config.manifest_remote, config.manifest_branch) == ("origin", "publish")
    assert config.commit_message == "Regenerate manifest"
    assert (config.author_name, config.author_email) == (
        "Manifest Bot",
        "bot@example.com",
    )
    assert config.pull is False
    assert config.push is True
    assert config.validate_fonts is True


@pytest.mark.parametrize(
    "text",
    [
        "manifestRepo: ../manifest\n",  # fontsRepo is required
        "fontsRepo: fonts\nunknownKey: 1\n",
        "fontsRepo: fonts\npull: maybe\n",
        "fontsRepo: fonts\nlicenses:\n  - ofl\n  - ofl\n",
        "fontsRepo: fonts\nauthor:\n  name: Bot\n",
    ],
)
def test_invalid_config(text, tmp_path):
    with pytest.raises(ValueError, match="Could not validate configuration"):
        ManifestConfig.from_yaml(text, tmp_path)


@pytest.mark.parametrize(
    "text,attr,want",
    [
        ("fontsRepo: fonts\nbranch: 2024\n", "branch", "2024"),
        ("fontsRepo: fonts\nmanifestBranch: 1.10\n", "manifest_branch", "1.10"),
        ("fontsRepo: fonts\ncommitMessage: yes\n", "commit_message", "yes"),
        ("fontsRepo: fonts\nremote: off\n", "remote", "off"),
        ("fontsRepo: fonts\nlicenses:\n  - 1\n  - ofl\n", "licenses", ["1", "ofl"]),
    ],
)
def test_string_values_keep_their_text(text, attr, want, tmp_path):
    config = ManifestConfig.from_yaml(text, tmp_path)
    assert getattr(config, attr) == want


def test_numeric_fonts_repo_is_a_path(tmp_path):
    config = ManifestConfig.from_yaml("fontsRepo: 2024\n", tmp_path)
    assert config.fonts_repo == (tmp_path / "2024").resolve()


def test_location_file(tmp_path):
    fp = tmp_path / "local-repo-location.txt"
    fp.write_text("  /srv/google/fonts\n", encoding="utf-8")
    config = ManifestConfig.from_location_file(fp)
    assert config.fonts_repo == Path("/srv/google/fonts").resolve()


def test_empty_location_file(tmp_path):
    fp = tmp_path / "local-repo-location.txt"
    fp.write_text("\n", encoding="utf-8")
    with pytest.raises(ValueError, match="does not contain a path"):
        ManifestConfig.from_location_file(fp)


def test_load_config_falls_back_to_location_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with pytest.raises(ValueError, match="No configuration given"):
        load_config()
    (tmp_path / "fonts").mkdir()
    (tmp_path / "local-repo-location.txt").write_text("fonts")
    assert load_config().fonts_repo == (tmp_path / "fonts").resolve()
    assert load_config(fonts_repo="other").fonts_repo == (tmp_path / "other").resolve()
    assert load_config().out_dir == Path.cwd()


def test_replace_skips_none(tmp_path):
    config = ManifestConfig.from_yaml("fontsRepo: fonts\n", tmp_path)
    changed = config.replace(
        licenses=["ofl"], manifest_repo=tmp_path / "m", output_dir=None
    )
    assert changed.licenses == ["ofl"]
    assert changed.manifest_repo == (tmp_path / "m").resolve()
    assert changed.output_dir is None
    assert changed.out_dir == changed.manifest_repo
    assert config.licenses == list(LICENSE_DIRS)
