from __future__ import annotations

from pathlib import Path

import pytest

from dogfinder_web.errors import PathTraversalError
from dogfinder_web.resolver import decode_request_path, is_within_root, resolve_request_path

ROOT = Path("/srv/dogfinder/web")


def test_root_indicator_maps_to_index() -> None:
    assert resolve_request_path(ROOT, "/") == ROOT / "index.html"


def test_nested_asset_is_joined_under_root() -> None:
    assert resolve_request_path(ROOT, "/assets/fonts/Roboto.ttf") == (
        ROOT / "assets" / "fonts" / "Roboto.ttf"
    )


def test_dot_segments_are_normalized_inside_root() -> None:
    assert resolve_request_path(ROOT, "/assets/../main.dart.js") == ROOT / "main.dart.js"
    assert resolve_request_path(ROOT, "/./icons/./Icon-192.png") == ROOT / "icons" / "Icon-192.png"


def test_path_normalizing_to_root_itself_is_allowed() -> None:
    assert resolve_request_path(ROOT, "/assets/..") == ROOT


def test_repeated_leading_slashes_stay_under_root() -> None:
    assert resolve_request_path(ROOT, "//etc/passwd") == ROOT / "etc" / "passwd"


@pytest.mark.parametrize(
    "request_path",
    [
        "/..",
        "/../../etc/passwd",
        "/assets/../../secret",
        "/../web-evil/index.html",
        "/..\\..\\secret",
    ],
)
def test_paths_escaping_root_are_rejected(request_path: str) -> None:
    with pytest.raises(PathTraversalError) as excinfo:
        resolve_request_path(ROOT, request_path)
    assert excinfo.value.status_code == 403
    assert excinfo.value.body == "Forbidden"


def test_encoded_separators_are_rejected_after_decoding() -> None:
    decoded = decode_request_path("/..%2f..%2fsecret")
    assert decoded == "/../../secret"
    with pytest.raises(PathTraversalError):
        resolve_request_path(ROOT, decoded)


def test_sibling_directory_sharing_a_prefix_is_not_within_root() -> None:
    assert not is_within_root(ROOT, Path("/srv/dogfinder/web-evil/index.html"))
    assert is_within_root(ROOT, ROOT)
    assert is_within_root(ROOT, ROOT / "a" / "b")


def test_decode_drops_query_and_fragment() -> None:
    assert decode_request_path("/main.dart.js?v=3") == "/main.dart.js"
    assert decode_request_path("/dogs/42#photos") == "/dogs/42"


def test_decode_percent_escapes() -> None:
    assert decode_request_path("/assets/my%20dog.png") == "/assets/my dog.png"
    # An encoded '?' is part of the name, not a query separator.
    assert decode_request_path("/what%3F.txt") == "/what?.txt"


def test_decode_empty_path_is_root() -> None:
    assert decode_request_path("") == "/"
    assert decode_request_path("?q=1") == "/"


def test_decode_malformed_escapes_does_not_raise() -> None:
    decoded = decode_request_path("/bad%E0%A4%A")
    assert decoded.startswith("/bad")
