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

"""CLI entry point for checking data files against a descriptor."""

import argparse
import importlib
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from ..config import validator_config
from ..exceptions import DescriptorFileError
from ..file_io.source_location import SourceLocation, format_source
from ..parsing.descriptor_loader import load_descriptor
from ..validator import TypeValidator
from . import CheckResult, check_files

logger = logging.getLogger(__name__)

DATA_EXTENSIONS = ('.yaml', '.yml', '.json')


def find_data_files(paths: List[str], exclude: Optional[Path] = None) -> List[Path]:
    """Find data files in the given paths, skipping ``exclude``."""
    data_files = []
    excluded = exclude.resolve() if exclude is not None else None

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            # Explicit files are checked whatever their extension.
            data_files.append(path)
        elif path.is_dir():
            for ext in DATA_EXTENSIONS:
                data_files.extend(path.rglob(f'*{ext}'))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    if excluded is not None:
        data_files = [p for p in data_files if p.resolve() != excluded]
    return sorted(set(data_files))


def load_validator_registry(module_name: str) -> Dict[str, Callable[..., Any]]:
    """Collect the public callables of ``module_name`` as custom validators."""
    module = importlib.import_module(module_name)
    return {
        name: obj
        for name, obj in vars(module).items()
        if callable(obj) and not name.startswith('_')
    }


def _print_results(results: List[CheckResult], output_format: str) -> None:
    if output_format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'results': [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")
    else:  # human-readable
        for result in results:
            if result.errors:
                print(f"\n{result.file_path}:")
                for error in result.errors:
                    loc = SourceLocation(
                        file_path=Path(result.file_path),
                        yaml_path=error.get('yaml_path'),
                        line=error.get('line'),
                        column=error.get('column'),
                    )
                    print(f"  ERROR: {error['message']}{format_source(loc)}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the checker CLI."""
    parser = argparse.ArgumentParser(
        prog='type-validator',
        description='Check YAML/JSON data files against an object descriptor',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='Data files or directories to check (default: current directory)',
    )
    parser.add_argument(
        '-d', '--descriptor',
        required=True,
        help='Descriptor document (YAML or JSON)',
    )
    parser.add_argument(
        '--validators',
        default=None,
        help='Module whose public callables are available as custom validators',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )

    args = parser.parse_args(argv)
    validator_config.set_logging()

    if not args.paths:
        args.paths = ['.']

    registry = None
    if args.validators:
        try:
            registry = load_validator_registry(args.validators)
        except ImportError as e:
            print(f"Error: Cannot import validators module '{args.validators}': {e}", file=sys.stderr)
            sys.exit(2)

    try:
        descriptor = load_descriptor(args.descriptor, validators=registry)
    except DescriptorFileError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)
    validator = TypeValidator(descriptor)

    data_files = find_data_files(args.paths, exclude=Path(args.descriptor))
    if not data_files:
        print("No data files found.", file=sys.stderr)
        sys.exit(1)

    logger.debug(f"Checking {len(data_files)} file(s) against {args.descriptor}")
    results = check_files(data_files, validator)
    _print_results(results, args.format)

    # Exit with error code if any errors found
    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print(f"Check succeeded: {len(results)} file(s) valid.")
    sys.exit(0)


if __name__ == '__main__':
    main()
