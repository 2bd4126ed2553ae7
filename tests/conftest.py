import pytest
from pathlib import Path

from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen


ROBOTO_METADATA = """\
name: "Roboto"
designer: "Christian Robertson"
license: "APACHE2"
category: "SANS_SERIF"
date_added: "2013-01-09"
fonts {
  name: "Roboto"
  style: "normal"
  weight: 400
  filename: "Roboto[wdth,wght].ttf"
  post_script_name: "Roboto-Regular"
  full_name: "Roboto Regular"
  copyright: "Copyright 2011 The Roboto Project Authors"
}
subsets: "menu"
subsets: "latin"
subsets: "cyrillic"
subsets: "latin"
axes {
  tag: "wdth"
  min_value: 75.0
  max_value: 100.0
}
axes {
  tag: "wght"
  min_value: 100.0
  max_value: 900.0
}
"""

ABEL_METADATA = """\
# Abel is a display family
name: "Abel"
designer: "MADType"
license: "OFL"
category: "SANS_SERIF"
fonts {
  name: "Abel"
  style: "normal"
  weight: 400
  filename: "Abel-Regular.ttf"
}
subsets: "latin"
"""


def make_family(root: Path, license: str, name: str, fonts=None, metadata=None):
    family_dir = root / license / name
    family_dir.mkdir(parents=True, exist_ok=True)
    for filename, data in (fonts or {}).items():
        (family_dir / filename).write_bytes(data)
    if metadata is not None:
        (family_dir / "METADATA.pb").write_text(metadata, encoding="utf-8")
    return family_dir


def make_font(fp: Path, family_name="Test"):
    pen = TTGlyphPen(None)
    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder([".notdef", "space"])
    fb.setupCharacterMap({32: "space"})
    fb.setupGlyf({".notdef": pen.glyph(), "space": pen.glyph()})
    fb.setupHorizontalMetrics({".notdef": (500, 0), "space": (250, 0)})
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": family_name, "styleName": "Regular"})
    fb.setupOS2()
    fb.setupPost()
    fb.save(str(fp))
    return fp


@pytest.fixture
def fonts_repo(tmp_path):
    """A small google/fonts style checkout.

    apache/roboto   variable family with axes
    ofl/abel        static family
    ofl/emptyfam    METADATA.pb only, skipped
    ofl/nometa      fonts without METADATA.pb
    ufl/ubuntu      fonts with a broken METADATA.pb
    """
    root = tmp_path / "fonts"
    make_family(
        root,
        "apache",
        "roboto",
        {"Roboto[wdth,wght].ttf": b"roboto-vf"},
        ROBOTO_METADATA,
    )
    make_family(root, "ofl", "abel", {"Abel-Regular.ttf": b"abel"}, ABEL_METADATA)
    make_family(root, "ofl", "emptyfam", {}, ABEL_METADATA)
    make_family(root, "ofl", "nometa", {"NoMeta-Regular.otf": b"nometa"})
    make_family(
        root,
        "ufl",
        "ubuntu",
        {
            "Ubuntu-Regular.ttf": b"ubuntu-regular",
            "Ubuntu-Bold.ttf": b"ubuntu-bold",
            "FONTLOG.txt": b"not a font",
        },
        'name: "Ubuntu"\nfonts {\n  name: "Ubuntu"\n',
    )
    (root / "ofl" / "README.md").write_text("not a family")
    return root
