# -*- mode: python; encoding: utf-8 -*-
#
# Copyright 2021 the highlightd contributors
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may not
# use this file except in compliance with the License.  You may obtain a copy of
# the License at
#
#   http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.  See the
# License for the specific language governing permissions and limitations under
# the License.

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, Union

from highlightd import base

# Marks the end of a request. There is no length prefix.
TERMINATOR = b"\0"
# Ends the single response written before the server closes the connection.
RESPONSE_TERMINATOR = b"\n"


class InvalidRequest(base.Error):
    pass


class InvalidResponse(base.Error):
    pass


@dataclass(frozen=True)
class HighlightRequest:
    code: str
    language: str

    def to_json(self) -> Dict[str, str]:
        return {"code": self.code, "language": self.language}


@dataclass(frozen=True)
class ResponseBase:
    variant: ClassVar[str]

    message: str

    def to_json(self) -> Dict[str, str]:
        return {self.variant: self.message}


@dataclass(frozen=True)
class Success(ResponseBase):
    variant = "success"


@dataclass(frozen=True)
class Failure(ResponseBase):
    variant = "failure"


HighlightResponse = Union[Success, Failure]


def decode_request(data: bytes) -> HighlightRequest:
    """Decode the request text, without its terminator

    Raises InvalidRequest if |data| is not UTF-8, not JSON, or not an object
    with string "code" and "language" members. Other members are ignored."""

    try:
        value = json.loads(data.decode("utf-8"))
    except UnicodeDecodeError as error:
        raise InvalidRequest(f"invalid UTF-8: {error}") from None
    except ValueError as error:
        raise InvalidRequest(str(error)) from None
    except RecursionError:
        raise InvalidRequest("JSON value nested too deeply") from None

    if not isinstance(value, dict):
        raise InvalidRequest(f"expected a JSON object, got {type(value).__name__}")

    fields: Dict[str, str] = {}
    for name in ("code", "language"):
        if name not in value:
            raise InvalidRequest(f"missing field: {name!r}")
        if not isinstance(value[name], str):
            raise InvalidRequest(f"field {name!r} must be a string")
        fields[name] = value[name]

    return HighlightRequest(**fields)


def encode_request(request: HighlightRequest) -> bytes:
    return json.dumps(request.to_json()).encode("utf-8") + TERMINATOR


def encode_response(response: HighlightResponse) -> bytes:
    return (
        json.dumps(response.to_json(), ensure_ascii=False).encode("utf-8")
        + RESPONSE_TERMINATOR
    )


def decode_response(data: bytes) -> HighlightResponse:
    try:
        value: Any = json.loads(data.decode("utf-8"))
    except ValueError as error:
        raise InvalidResponse(str(error)) from None

    if not isinstance(value, dict) or len(value) != 1:
        raise InvalidResponse(f"expected an object with one member: {value!r}")

    ((variant, message),) = value.items()

    if not isinstance(message, str):
        raise InvalidResponse(f"{variant!r} must be a string")
    if variant == Success.variant:
        return Success(message)
    if variant == Failure.variant:
        return Failure(message)
    raise InvalidResponse(f"unexpected response variant: {variant!r}")
