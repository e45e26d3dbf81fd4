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

"""YAML/JSON document parser with source maps and caching support."""

import json
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ..config import validator_config
from ..exceptions import DataFileError
from ..file_io.source_location import SourceMap

logger = logging.getLogger(__name__)


JSON_SUFFIXES = (".json",)


class YamlParser:
    """Parse YAML and JSON documents, remembering node locations.

    Files with a JSON suffix are decoded with the json module: PyYAML follows
    YAML 1.1 and reads JSON numbers such as ``1e5`` as strings. Source maps
    always come from the YAML node tree, which yields the same pointers for
    JSON content.
    """

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else validator_config.cache_enabled
        self._cache: Dict[Path, Tuple[Any, SourceMap]] = {}

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def build_source_map(cls, content: str) -> SourceMap:
        """Map JSON-pointer paths of ``content`` to 1-based line/column.

        Uses PyYAML's node tree (yaml.compose) so locations are tracked
        without changing the data returned by safe_load.
        """
        source_map: SourceMap = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parse errors are reported by the loader itself.
            return source_map

        if root is None:
            return source_map

        def _walk(node, path: str) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is not None:
                source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(value_node, f"{path}/{cls._json_pointer_escape(str(key))}")
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    def load_with_source(self, file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
        """Load a document file and return (data, source_map).

        Raises:
            DataFileError: If the file is missing or cannot be parsed
        """
        path = Path(file_path)

        if not path.exists():
            raise DataFileError(f"File not found: {path}")

        if not path.is_file():
            raise DataFileError(f"Path is not a file: {path}")

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading document from cache: {path}")
            return self._cache[path]

        logger.debug(f"Loading document: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DataFileError(f"Failed to read file {path}: {exc}") from exc

        try:
            data, source_map = self.load_from_string_with_source(
                content, json_format=path.suffix.lower() in JSON_SUFFIXES
            )
        except DataFileError as exc:
            raise DataFileError(f"Failed to parse {path}: {exc}") from exc

        if self.cache_enabled:
            self._cache[path] = (data, source_map)
        return data, source_map

    def load_from_string_with_source(self, content: str, json_format: bool = False) -> Tuple[Any, SourceMap]:
        """Parse document content and return (data, source_map). Empty content yields ``{}``."""
        if json_format:
            try:
                data = json.loads(content) if content.strip() else None
            except json.JSONDecodeError as exc:
                raise DataFileError(f"Invalid JSON content: {exc}") from exc
        else:
            try:
                data = yaml.safe_load(content)
            except yaml.YAMLError as exc:
                raise DataFileError(f"Invalid YAML content: {exc}") from exc

        if data is None:
            data = {}
        return data, self.build_source_map(content)

    def clear_cache(self):
        """Clear the document cache."""
        self._cache.clear()
        logger.debug("Document cache cleared")


# Global parser instance
yaml_parser = YamlParser()
