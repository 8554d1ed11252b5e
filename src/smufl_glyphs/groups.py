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

"""Generates a Glyphs Groups.plist with one sidebar subgroup per SMuFL range."""

from fontTools.misc import plistlib
from smufl_glyphs.metadata import RangeGroup
from typing import Any, Mapping


CATEGORY = "SMuFL"
ICON = "MusicTemplate"


def groups(ranges: Mapping[str, RangeGroup]) -> Mapping[str, Any]:
    return {
        "categories": [
            {
                "name": CATEGORY,
                "icon": ICON,
                "subGroup": [
                    {"name": r.label, "coverage": list(r.glyph_names)}
                    for r in ranges.values()
                ],
            }
        ]
    }


def generate_groups(ranges: Mapping[str, RangeGroup]) -> str:
    return plistlib.dumps(groups(ranges), pretty_print=True).decode("utf-8")
