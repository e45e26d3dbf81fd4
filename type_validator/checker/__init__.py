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

"""Check data files against a descriptor."""

import logging
from pathlib import Path
from typing import List, Optional

from ..exceptions import DataFileError
from ..file_io.source_location import lookup_source
from ..parsing.yaml_parser import YamlParser, yaml_parser
from ..validator import TypeValidator
from .report import CheckResult

__all__ = ['check_file', 'check_files', 'CheckResult']

logger = logging.getLogger(__name__)


def check_file(file_path: Path, validator: TypeValidator, parser: Optional[YamlParser] = None) -> CheckResult:
    """Validate one data file and record the first issue, if any."""
    parser = parser or yaml_parser
    result = CheckResult(file_path)

    try:
        data, source_map = parser.load_with_source(file_path)
    except DataFileError as e:
        result.add_error(str(e))
        return result

    # Custom validators are user code; report their failures against the file.
    try:
        issue = validator.explain(data)
    except Exception as e:
        logger.debug(f"Custom validator raised while checking {file_path}", exc_info=True)
        result.add_error(f"Unexpected error during check: {e}")
        return result

    if issue is not None:
        loc = lookup_source(source_map, issue.path)
        result.add_error(
            issue.message,
            line=loc.line,
            column=loc.column,
            yaml_path=issue.path or "/",
        )
    return result


def check_files(
    file_paths: List[Path],
    validator: TypeValidator,
    parser: Optional[YamlParser] = None,
) -> List[CheckResult]:
    """Validate a list of data files.

    Returns:
        List of CheckResult objects, one per file
    """
    return [check_file(file_path, validator, parser) for file_path in file_paths]
