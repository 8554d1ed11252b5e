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

import collections
from fontTools.misc import plistlib
from smufl_glyphs import groups
from smufl_glyphs.metadata import RangeGroup
from test_helper import load_test_metadata


def _parsed():
    return plistlib.loads(
        groups.generate_groups(load_test_metadata().ranges).encode("utf-8")
    )


def test_single_smufl_category():
    categories = _parsed()["categories"]
    assert len(categories) == 1
    assert categories[0]["name"] == "SMuFL"
    assert categories[0]["icon"] == "MusicTemplate"


def test_one_subgroup_per_range_in_order():
    sub_groups = _parsed()["categories"][0]["subGroup"]
    assert sub_groups == [
        {"name": "Clefs", "coverage": ["gClef", "cClef", "fClef"]},
        {"name": "Noteheads", "coverage": ["noteheadWhole", "noteheadBlack"]},
    ]


def test_every_range_member_in_exactly_one_subgroup():
    ranges = load_test_metadata().ranges
    sub_groups = _parsed()["categories"][0]["subGroup"]
    seen = collections.Counter(g for sg in sub_groups for g in sg["coverage"])
    for glyph_range in ranges.values():
        for glyph_name in glyph_range.glyph_names:
            assert seen[glyph_name] == 1


def test_output_is_stable():
    ranges = load_test_metadata().ranges
    assert groups.generate_groups(ranges) == groups.generate_groups(ranges)


def test_empty_range():
    content = groups.generate_groups({"empty": RangeGroup("empty", "Empty", ())})
    parsed = plistlib.loads(content.encode("utf-8"))
    assert parsed["categories"][0]["subGroup"] == [{"name": "Empty", "coverage": []}]


def test_is_a_property_list():
    content = groups.generate_groups(load_test_metadata().ranges)
    assert "<!DOCTYPE plist" in content
    assert '<plist version="1.0">' in content
