"""Loaders that turn the raw bytes of a file into asset values."""

from __future__ import annotations

import json
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

import cbor2
import msgpack
import yaml

Content = bytes | bytearray | memoryview


class LoadError(ValueError):
    """Raised when raw content cannot be turned into an asset."""

    @property
    def reason(self) -> BaseException | None:
        """The underlying error, if any."""
        return self.__cause__


def _as_bytes(content: Content) -> bytes:
    return content if isinstance(content, bytes) else bytes(content)


def _decode_utf8(content: Content) -> str:
    try:
        return _as_bytes(content).decode("utf-8")
    except UnicodeDecodeError as err:
        raise LoadError(f"content is not valid UTF-8: {err}") from err


class Loader(ABC):
    """Specifies how an asset is loaded from its raw bytes.

    The extension the content was read with is passed too, which helps when
    one asset type is stored in several formats.
    """

    @abstractmethod
    def load(self, content: Content, ext: str) -> Any:
        """Turn ``content`` into a value; raise :class:`LoadError` on failure."""


class LoadFrom(Loader):
    """Loads a value with another loader, then converts it."""

    def __init__(self, convert: Callable[[Any], Any], loader: Loader) -> None:
        self.convert = convert
        self.loader = loader

    def load(self, content: Content, ext: str) -> Any:
        value = self.loader.load(content, ext)
        try:
            return self.convert(value)
        except LoadError:
            raise
        except Exception as err:
            raise LoadError(f"cannot convert loaded value: {err}") from err

    def __repr__(self) -> str:
        return f"LoadFrom({self.convert!r}, {self.loader!r})"


class BytesLoader(Loader):
    """Loads content as raw bytes."""

    def load(self, content: Content, ext: str) -> bytes:
        return _as_bytes(content)

    def __repr__(self) -> str:
        return "BytesLoader()"


class StringLoader(Loader):
    """Loads content as a UTF-8 string, without trimming it."""

    def load(self, content: Content, ext: str) -> str:
        return _decode_utf8(content)

    def __repr__(self) -> str:
        return "StringLoader()"


class ParseLoader(Loader):
    """Parses UTF-8 content with ``parse`` after trimming surrounding whitespace."""

    def __init__(self, parse: Callable[[str], Any]) -> None:
        self.parse = parse

    def load(self, content: Content, ext: str) -> Any:
        text = _decode_utf8(content).strip()
        try:
            return self.parse(text)
        except (ValueError, TypeError, ArithmeticError) as err:
            raise LoadError(f"cannot parse {text!r}: {err}") from err

    def __repr__(self) -> str:
        return f"ParseLoader({self.parse!r})"


class _FormatLoader(Loader):
    """Decodes a serialisation format, then optionally builds a value from it."""

    _errors: tuple[type[BaseException], ...] = ()
    _format = ""

    def __init__(self, into: Callable[[Any], Any] | None = None) -> None:
        self.into = into

    @abstractmethod
    def _decode(self, content: Content) -> Any:
        """Decode the raw content into plain data."""

    def _load(self, content: Content) -> Any:
        try:
            data = self._decode(content)
        except LoadError:
            raise
        except self._errors as err:
            raise LoadError(f"invalid {self._format} content: {err}") from err
        if self.into is None:
            return data
        try:
            return self.into(data)
        except Exception as err:
            raise LoadError(f"cannot build value from {self._format} data: {err}") from err

    def load(self, content: Content, ext: str) -> Any:
        return self._load(content)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(into={self.into!r})"


class JsonLoader(_FormatLoader):
    """Loads JSON content."""

    _errors = (ValueError,)
    _format = "JSON"

    def _decode(self, content: Content) -> Any:
        return json.loads(_decode_utf8(content))

    def load(self, content: Content, ext: str) -> Any:
        """Decode JSON content, then build the value if a builder was given."""
        return self._load(content)


class TomlLoader(_FormatLoader):
    """Loads TOML content."""

    _errors = (tomllib.TOMLDecodeError,)
    _format = "TOML"

    def _decode(self, content: Content) -> Any:
        return tomllib.loads(_decode_utf8(content))

    def load(self, content: Content, ext: str) -> Any:
        """Decode TOML content, then build the value if a builder was given."""
        return self._load(content)


class YamlLoader(_FormatLoader):
    """Loads YAML content."""

    _errors = (yaml.YAMLError,)
    _format = "YAML"

    def _decode(self, content: Content) -> Any:
        return yaml.safe_load(_decode_utf8(content))

    def load(self, content: Content, ext: str) -> Any:
        """Decode YAML content, then build the value if a builder was given."""
        return self._load(content)


class MessagePackLoader(_FormatLoader):
    """Loads MessagePack content."""

    _errors = (ValueError, msgpack.UnpackException)
    _format = "MessagePack"

    def _decode(self, content: Content) -> Any:
        return msgpack.unpackb(_as_bytes(content), raw=False)

    def load(self, content: Content, ext: str) -> Any:
        """Decode MessagePack content, then build the value if a builder was given."""
        return self._load(content)


class CborLoader(_FormatLoader):
    """Loads CBOR content."""

    _errors = (cbor2.CBORDecodeError, ValueError, EOFError)
    _format = "CBOR"

    def _decode(self, content: Content) -> Any:
        return cbor2.loads(_as_bytes(content))

    def load(self, content: Content, ext: str) -> Any:
        """Decode CBOR content, then build the value if a builder was given."""
        return self._load(content)