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

"""Small helper functions."""

import contextlib
import os
from pathlib import Path
import sys
from typing import Optional


@contextlib.contextmanager
def file_printer(filename):
    if filename == "-":  # conventionally means print to stdout
        yield sys.stdout.write
    else:
        with open(filename, "w", encoding="utf-8") as f:
            yield f.write


def write_text(path: Path, content: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def home_dir() -> Optional[Path]:
    # $HOME only; Path.home() would fall back to the passwd database
    home = os.environ.get("HOME")
    if not home:
        return None
    return Path(home)


def is_macos() -> bool:
    return sys.platform == "darwin"
