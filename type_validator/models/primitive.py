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

from typing import Any, Dict, Optional, Tuple

from ..exceptions import ConfigurationError


STRING = "string"
NUMBER = "number"
OBJECT = "object"
ARRAY = "array"

PRIMITIVE_KINDS = (STRING, NUMBER)
ALL_KINDS = (STRING, NUMBER, OBJECT, ARRAY)

_PRIMITIVE_TYPES: Dict[str, Tuple[type, ...]] = {
    STRING: (str,),
    NUMBER: (int, float),
}
_ARRAY_TYPES: Tuple[type, ...] = (list, tuple)


def check_primitive(kind: str, field_name: str, value: Any) -> Optional[str]:
    """Return an error message when ``value`` does not match ``kind``, else None.

    ``object`` is not a primitive kind: object fields are validated by
    recursing into their nested descriptor.
    """
    if kind == ARRAY:
        if isinstance(value, _ARRAY_TYPES):
            return None
        return f'"{field_name}" should be an array.'

    expected = _PRIMITIVE_TYPES.get(kind)
    if expected is None:
        raise ConfigurationError(f"Kind '{kind}' cannot be checked as a primitive")

    # bool is an int subclass but never a number here
    if isinstance(value, bool) or not isinstance(value, expected):
        return f'"{field_name}" should be of type {kind}.'
    return None
