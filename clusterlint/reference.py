"""Parsing and normalisation of container image references."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

NAME_TOTAL_LENGTH_MAX = 255
DEFAULT_DOMAIN = "docker.io"
LEGACY_DEFAULT_DOMAIN = "index.docker.io"
OFFICIAL_REPO_NAME = "library"
DEFAULT_TAG = "latest"

_ALPHA_NUMERIC = r"[a-z0-9]+"
# An empty separator only lengthens the alphanumeric run, so it is left out
# of the alternatives to keep matching linear.
_SEPARATOR = r"(?:[._]|__|-+)"
_NAME_COMPONENT = rf"{_ALPHA_NUMERIC}(?:{_SEPARATOR}{_ALPHA_NUMERIC})*"
_DOMAIN_COMPONENT = r"(?:[a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])"
_DOMAIN = rf"{_DOMAIN_COMPONENT}(?:\.{_DOMAIN_COMPONENT})*(?::[0-9]+)?"
_TAG = r"\w[\w.-]{0,127}"
_DIGEST = r"[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}"
_PATH = rf"{_NAME_COMPONENT}(?:/{_NAME_COMPONENT})*"
_NAME = rf"(?:{_DOMAIN}/)?{_PATH}"

_REFERENCE_RE = re.compile(rf"({_NAME})(?::({_TAG}))?(?:@({_DIGEST}))?", re.ASCII)
_ANCHORED_NAME_RE = re.compile(rf"(?:({_DOMAIN})/)?({_PATH})", re.ASCII)
_IDENTIFIER_RE = re.compile(r"[a-f0-9]{64}")
_ENCODED_RE = re.compile(r"[a-f0-9]+")

_DIGEST_LENGTHS = {"sha256": 64, "sha384": 96, "sha512": 128}


class InvalidReferenceError(ValueError):
    """Raised when text is not a valid image reference."""


@dataclass(frozen=True)
class Reference:
    """A parsed image reference.

    A reference made of a digest alone has an empty ``path``.
    """

    domain: str = ""
    path: str = ""
    tag: str | None = None
    digest: str | None = None

    @property
    def name(self) -> str:
        """The repository name, with its domain if there is one."""
        return f"{self.domain}/{self.path}" if self.domain else self.path

    @property
    def is_name_only(self) -> bool:
        return bool(self.path) and self.tag is None and self.digest is None

    def __str__(self) -> str:
        if not self.path:
            return self.digest or ""
        text = self.name
        if self.tag:
            text += f":{self.tag}"
        if self.digest:
            text += f"@{self.digest}"
        return text


def _validate_digest(text: str) -> str:
    algorithm, sep, encoded = text.partition(":")
    if not sep or not algorithm or not encoded:
        raise InvalidReferenceError("invalid checksum digest format")
    length = _DIGEST_LENGTHS.get(algorithm)
    if length is None:
        raise InvalidReferenceError("unsupported digest algorithm")
    if len(encoded) != length:
        raise InvalidReferenceError("invalid checksum digest length")
    if not _ENCODED_RE.fullmatch(encoded):
        raise InvalidReferenceError("invalid checksum digest format")
    return text


def _parse(text: str) -> Reference:
    match = _REFERENCE_RE.fullmatch(text)
    if match is None:
        if not text:
            raise InvalidReferenceError("repository name must have at least one component")
        if _REFERENCE_RE.fullmatch(text.lower()):
            raise InvalidReferenceError("invalid reference format: repository name must be lowercase")
        raise InvalidReferenceError("invalid reference format")
    name, tag, digest = match.groups()
    if len(name) > NAME_TOTAL_LENGTH_MAX:
        raise InvalidReferenceError(
            f"repository name must not be more than {NAME_TOTAL_LENGTH_MAX} characters"
        )
    name_match = _ANCHORED_NAME_RE.fullmatch(name)
    if name_match is None:
        raise InvalidReferenceError("invalid reference format")
    if digest:
        _validate_digest(digest)
    return Reference(
        domain=name_match.group(1) or "",
        path=name_match.group(2),
        tag=tag,
        digest=digest,
    )


def _split_docker_domain(name: str) -> tuple[str, str]:
    head, sep, rest = name.partition("/")
    if not sep or (not any(ch in head for ch in ".:") and head != "localhost"):
        domain, remainder = DEFAULT_DOMAIN, name
    else:
        domain, remainder = head, rest
    if domain == LEGACY_DEFAULT_DOMAIN:
        domain = DEFAULT_DOMAIN
    if domain == DEFAULT_DOMAIN and "/" not in remainder:
        remainder = f"{OFFICIAL_REPO_NAME}/{remainder}"
    return domain, remainder


def parse_normalized_named(text: str) -> Reference:
    """Parse an image name the way a container runtime would, filling in
    the default registry and the official repository prefix."""
    if _IDENTIFIER_RE.fullmatch(text):
        raise InvalidReferenceError(
            f"invalid repository name ({text}), cannot specify 64-byte hexadecimal strings"
        )
    domain, remainder = _split_docker_domain(text)
    remote_name = remainder.partition(":")[0]
    if remote_name.lower() != remote_name:
        raise InvalidReferenceError("invalid reference format: repository name must be lowercase")
    return _parse(f"{domain}/{remainder}")


def parse_any_reference(text: str) -> Reference:
    """Parse a bare image id, a digest or a named reference."""
    if _IDENTIFIER_RE.fullmatch(text):
        return Reference(digest=f"sha256:{text}")
    try:
        return Reference(digest=_validate_digest(text))
    except InvalidReferenceError:
        pass
    return parse_normalized_named(text)


def tag_name_only(ref: Reference) -> Reference:
    """Add the default tag to a reference that has neither tag nor digest."""
    if ref.is_name_only:
        return replace(ref, tag=DEFAULT_TAG)
    return ref