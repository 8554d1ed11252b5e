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

from absl import flags
import importlib.resources as resources
from pathlib import Path
from smufl_glyphs import metadata
from smufl_glyphs.metadata import DEFAULT_METADATA_URL, Metadata
import toml
from typing import Any, MutableMapping, NamedTuple, Optional, Tuple


FLAGS = flags.FLAGS


_DEFAULT_CONFIG_FILE = "_default.toml"


# we use None as a sentinel for flag not set; InstallConfig has the actual defaults.
# CLI flags override config file (which overrides default InstallConfig).
flags.DEFINE_string("config_file", None, "Config file (toml).")
flags.DEFINE_string(
    "metadata_url", None, "Base url to fetch the SMuFL metadata json from."
)
flags.DEFINE_string(
    "metadata_dir",
    None,
    "Directory holding the SMuFL metadata json. If set, nothing is fetched.",
)
flags.DEFINE_string("glyphnames_file", None, "Name of the SMuFL glyph name table.")
flags.DEFINE_string("ranges_file", None, "Name of the SMuFL range table.")
flags.DEFINE_string(
    "build_dir",
    None,
    "Where generated files are written. Unset means a temporary directory.",
)
flags.DEFINE_string(
    "destination",
    None,
    "Directory to install into. Relative paths are relative to $HOME.",
)
flags.DEFINE_string("glyph_data_file", None, "Name of the glyph data file.")
flags.DEFINE_string("groups_file", None, "Name of the groups file.")
flags.DEFINE_string("output_file", "-", "Output filename ('-' means stdout)")


class InstallConfig(NamedTuple):
    metadata_url: str = DEFAULT_METADATA_URL
    metadata_dir: Optional[str] = None
    glyphnames_file: str = "glyphnames.json"
    ranges_file: str = "ranges.json"
    build_dir: Optional[str] = None
    destination: str = "Library/Application Support/Glyphs/Info"
    glyph_data_file: str = "GlyphData.xml"
    groups_file: str = "Groups.plist"

    def generated_files(self, build_dir: Path) -> Tuple[Path, Path]:
        build_dir = Path(build_dir)
        return (build_dir / self.glyph_data_file, build_dir / self.groups_file)

    def destination_dir(self, home: Path) -> Path:
        # an absolute destination wins over home
        return Path(home) / self.destination

    def validate(self):
        for attr_name in ("glyph_data_file", "groups_file"):
            value = getattr(self, attr_name)
            if not value or Path(value).name != value:
                raise ValueError(
                    f"'{attr_name}' must be a plain filename, got {value!r}"
                )
        if self.glyph_data_file == self.groups_file:
            raise ValueError("'glyph_data_file' and 'groups_file' must differ")
        if not self.destination:
            raise ValueError("'destination' must be set")
        return self


def write(dest: Path, config: InstallConfig):
    toml_cfg = {k: v for k, v in config._asdict().items() if v is not None}
    dest.write_text(toml.dumps(toml_cfg))


def _resolve_config(config_file: Optional[Path] = None) -> MutableMapping[str, Any]:
    if config_file is None:
        return toml.loads(
            resources.files("smufl_glyphs.data")
            .joinpath(_DEFAULT_CONFIG_FILE)
            .read_text(encoding="utf-8")
        )
    return toml.load(config_file)


_DEFAULT_CONFIG = InstallConfig()


def _pop_flag(config: MutableMapping[str, Any], name: str) -> Any:
    config_value = config.pop(name, None)
    flag_value = getattr(FLAGS, name)
    if config_value is None and flag_value is None:
        return getattr(_DEFAULT_CONFIG, name)
    return flag_value if flag_value is not None else config_value


def load(config_file: Optional[Path] = None) -> InstallConfig:
    if config_file is None and FLAGS.config_file:
        config_file = Path(FLAGS.config_file)
    config = _resolve_config(config_file)

    # CLI flags will take precedence over the config file
    install_config = InstallConfig(
        **{name: _pop_flag(config, name) for name in InstallConfig._fields}
    )
    if config:
        raise ValueError(f"Unexpected config: {config}")

    return install_config.validate()


def load_metadata(install_config: InstallConfig) -> Metadata:
    metadata_dir = install_config.metadata_dir
    return metadata.load_metadata(
        install_config.metadata_url,
        Path(metadata_dir) if metadata_dir else None,
        install_config.glyphnames_file,
        install_config.ranges_file,
    )
