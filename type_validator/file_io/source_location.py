# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Dict, Optional


SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    yaml_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def _parent_pointer(yaml_path: str) -> str:
    return yaml_path.rsplit("/", 1)[0]


def lookup_source(source_map: Optional[SourceMap], yaml_path: Optional[str]) -> SourceLocation:
    """Find the location of ``yaml_path``, falling back to its nearest recorded ancestor.

    Missing fields have no node of their own, so their parent object is
    reported instead. The returned ``yaml_path`` is always the requested one.
    """
    if not source_map or yaml_path is None:
        return SourceLocation(yaml_path=yaml_path)

    candidate = yaml_path
    while True:
        entry = source_map.get(candidate)
        if entry:
            return SourceLocation(
                yaml_path=yaml_path,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        if not candidate:
            return SourceLocation(yaml_path=yaml_path)
        candidate = _parent_pointer(candidate)


def _format_file_path(path: Path) -> str:
    try:
        return os.path.relpath(path)
    except ValueError:
        # Different drive on Windows
        return str(path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc:
        return ""

    parts = []
    if loc.file_path is not None:
        file_path = _format_file_path(loc.file_path)
        if loc.line is not None and loc.column is not None:
            parts.append(f"source={file_path}:{loc.line}:{loc.column}")
        elif loc.line is not None:
            parts.append(f"source={file_path}:{loc.line}")
        else:
            parts.append(f"source={file_path}")
    elif loc.line is not None:
        # String content has no file; report the position alone.
        parts.append(f"line={loc.line}" + (f":{loc.column}" if loc.column is not None else ""))

    if loc.yaml_path:
        parts.append(f"yaml_path={loc.yaml_path}")

    if not parts:
        return ""

    return " (" + " ".join(parts) + ")"
