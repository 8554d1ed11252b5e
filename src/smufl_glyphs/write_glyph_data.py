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

"""Writes GlyphData.xml for the SMuFL glyphs.

Sample usage:
python -m smufl_glyphs.write_glyph_data --output_file GlyphData.xml
python -m smufl_glyphs.write_glyph_data --metadata_dir ~/oss/smufl/metadata
"""

from absl import app
from absl import flags
from smufl_glyphs import config
from smufl_glyphs import glyph_data
from smufl_glyphs import metadata
from smufl_glyphs import util


FLAGS = flags.FLAGS


def main(argv):
    install_config = config.load()
    smufl = config.load_metadata(install_config)
    content = glyph_data.generate_glyph_data(
        smufl.glyphs, metadata.glyph_to_range(smufl.ranges)
    )
    with util.file_printer(FLAGS.output_file) as write:
        write(content)


if __name__ == "__main__":
    app.run(main)
