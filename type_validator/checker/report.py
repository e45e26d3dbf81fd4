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

"""Result reporting for the data file checker."""

from pathlib import Path
from typing import List, Dict, Any, Optional


class CheckResult:
    """Container for checking results for a single data file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(
        self,
        message: str,
        line: Optional[int] = None,
        column: Optional[int] = None,
        yaml_path: Optional[str] = None,
    ):
        """Add an error message.

        Args:
            message: Error message
            line: Optional 1-based line of the offending node
            column: Optional 1-based column of the offending node
            yaml_path: Optional JSON pointer of the offending value
        """
        error: Dict[str, Any] = {'message': message}
        if line is not None:
            error['line'] = line
        if column is not None:
            error['column'] = column
        if yaml_path is not None:
            error['yaml_path'] = yaml_path
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'errors': self.errors,
        }
