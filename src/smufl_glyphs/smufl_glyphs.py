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

"""Set up SMuFL support in Glyphs.

The Glyphs font editor can be taught about extra glyphs and sidebar groups by
dropping a GlyphData.xml and a Groups.plist into its Application Support
directory. This generates both from the SMuFL (Standard Music Font Layout)
metadata and installs them, asking before it replaces anything that is
already there.

Sample usage:
smufl-glyphs
smufl-glyphs --force
smufl-glyphs --metadata_dir ~/oss/smufl/metadata --destination /tmp/glyphs
"""
from absl import app
from absl import flags
from absl import logging
from pathlib import Path
from smufl_glyphs import config, glyph_data, groups, install, metadata, util
from smufl_glyphs.config import InstallConfig
from smufl_glyphs.install import InstallDecision
from smufl_glyphs.metadata import MetadataFetchError
from smufl_glyphs.prompt import ConsolePrompter, Prompter
import sys
import tempfile
from typing import Dict, Optional, Tuple


FLAGS = flags.FLAGS


flags.DEFINE_bool(
    "force",
    False,
    "Install without user input, overwriting any existing files.",
    short_name="f",
)


_ISSUES_URL = "https://github.com/delucis/smufl-glyphs-info"


def build(install_config: InstallConfig, build_dir: Path) -> Tuple[Path, ...]:
    """Generate the files to install into build_dir.

    Metadata is fully loaded before anything is written, so a failed fetch
    leaves the build dir untouched.
    """
    smufl = config.load_metadata(install_config)
    glyph_ranges = metadata.glyph_to_range(smufl.ranges)

    glyph_data_path, groups_path = install_config.generated_files(build_dir)
    outputs = (
        (
            glyph_data_path,
            glyph_data.generate_glyph_data(smufl.glyphs, glyph_ranges),
        ),
        (groups_path, groups.generate_groups(smufl.ranges)),
    )
    for path, content in outputs:
        util.write_text(path, content)
        logging.info("Wrote %s", path)
    return tuple(path for path, _ in outputs)


def install_smufl(
    install_config: InstallConfig,
    home: Path,
    force: bool = False,
    prompter: Optional[Prompter] = None,
) -> Dict[Path, InstallDecision]:
    destination = install_config.destination_dir(home)
    if install_config.build_dir is not None:
        files = build(install_config, Path(install_config.build_dir))
        return install.install_all(files, destination, force=force, prompter=prompter)

    # nothing generated outlives the run
    with tempfile.TemporaryDirectory(prefix="smufl-glyphs-") as build_dir:
        files = build(install_config, Path(build_dir))
        return install.install_all(files, destination, force=force, prompter=prompter)


def _fatal(message: str):
    logging.error(message)
    sys.exit(1)


def _run(argv, prompter: Optional[Prompter] = None):
    if len(argv) > 1:
        raise app.UsageError(f"Unexpected arguments: {' '.join(argv[1:])}")

    if not util.is_macos():
        _fatal(
            "This tool is designed for use on macOS only. Running on macOS and "
            f"seeing this error? Please open an issue at {_ISSUES_URL}"
        )

    home = util.home_dir()
    if home is None:
        _fatal("$HOME is not set; unable to locate the Glyphs support directory")

    if prompter is None:
        prompter = ConsolePrompter()

    try:
        install_config = config.load()
    except (OSError, ValueError) as e:
        _fatal(f"Unable to load config: {e}")

    if not FLAGS.force and not prompter.confirm(
        "This will set up SMuFL support in Glyphs. Do you want to continue?"
    ):
        logging.info("Nothing installed")
        return

    try:
        install_smufl(install_config, home, force=FLAGS.force, prompter=prompter)
    except MetadataFetchError as e:
        _fatal(str(e))
    except ValueError as e:
        _fatal(f"Bad SMuFL metadata: {e}")
    except OSError as e:
        _fatal(f"Installation failed: {e}")


def _wants_help(argv) -> bool:
    return any(a in ("-h", "--help") for a in argv[1:])


def usage() -> str:
    # absl's own --help exits 1 and describes the setuptools wrapper module
    return "\n".join(
        (
            __doc__.strip(),
            "",
            "Flags:",
            FLAGS.module_help(sys.modules[__name__]),
            FLAGS.module_help(config),
        )
    )


def main():
    if _wants_help(sys.argv):
        print(usage())
        sys.exit(0)
    # We don't seem to be __main__ when run as cli tool installed by setuptools
    app.run(_run)


if __name__ == "__main__":
    main()
