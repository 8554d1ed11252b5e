# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Generates a Glyphs GlyphData.xml for SMuFL glyphs.

Produces rows like:

<glyph name="gClef" sortName="SMuFL.gClef" description="G CLEF" category="SMuFL"
    subCategory="Clefs" unicode="E050" production="uniE050" script="musical"/>
"""

from absl import logging
from lxml import etree  # pytype: disable=import-error
from smufl_glyphs.metadata import GlyphEntry
from typing import Mapping, NamedTuple, Optional


CATEGORY = "SMuFL"
SCRIPT = "musical"


class _Attribute(NamedTuple):
    name: str
    required: bool = False


# Declared in the order Glyphs documents them
_ATTLIST = (
    _Attribute("unicode"),
    _Attribute("unicodeLegacy"),
    _Attribute("name", required=True),
    _Attribute("sortName"),
    _Attribute("sortNameKeep"),
    _Attribute("category", required=True),
    _Attribute("subCategory"),
    _Attribute("script"),
    _Attribute("description"),
    _Attribute("production"),
    _Attribute("altNames"),
    _Attribute("decompose"),
    _Attribute("anchors"),
    _Attribute("accents"),
)


def _doctype() -> str:
    lines = [
        "<!DOCTYPE glyphData [",
        "<!ELEMENT glyphData (glyph)+>",
        "<!ELEMENT glyph EMPTY>",
        "<!ATTLIST glyph",
    ]
    for attr in _ATTLIST:
        default = "#REQUIRED" if attr.required else "#IMPLIED"
        lines.append(f"  {attr.name} CDATA {default}")
    lines.append(">")
    lines.append("]>")
    return "\n".join(lines)


def _glyph_attrib(
    glyph: GlyphEntry, sub_category: Optional[str]
) -> Mapping[str, str]:
    codepoint = glyph.codepoint_hex
    attrib = {
        "name": glyph.name,
        "sortName": f"SMuFL.{glyph.name}",
        "description": glyph.description.upper(),
        "category": CATEGORY,
    }
    if sub_category is not None:
        attrib["subCategory"] = sub_category
    attrib["unicode"] = codepoint
    attrib["production"] = f"uni{codepoint}"
    attrib["script"] = SCRIPT
    return attrib


def generate_glyph_data(
    glyphs: Mapping[str, GlyphEntry], glyph_ranges: Mapping[str, str]
) -> str:
    """Build the GlyphData.xml document.

    Args:
        glyphs: glyph name => entry, in the order they should be written.
        glyph_ranges: glyph name => range label, see metadata.glyph_to_range.
    """
    root = etree.Element("glyphData")
    for name, glyph in glyphs.items():
        sub_category = glyph_ranges.get(name)
        if sub_category is None:
            logging.warning("%s is not a member of any range; no subCategory", name)
        etree.SubElement(root, "glyph", _glyph_attrib(glyph, sub_category))

    return etree.tostring(
        root,
        doctype=_doctype(),
        encoding="UTF-8",
        xml_declaration=True,
        pretty_print=True,
    ).decode("utf-8")
