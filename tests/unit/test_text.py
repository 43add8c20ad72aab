import pytest

from skillroute.utils.text import contains_cjk, display_width, normalize, slugify, tokenize


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Borrow-Checker error!", ["borrow", "checker", "error"]),
        ("snake_case_name", ["snake", "case", "name"]),
        ("  spaced\tout\n", ["spaced", "out"]),
        ("Ｅ０３８２", ["e0382"]),
        ("", []),
    ],
)
def test_tokenize(text, expected):
    assert tokenize(text) == expected


def test_normalize():
    assert normalize("Arc<Mutex<T>>") == "arc mutex t"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("m01-ownership", "m01-ownership"),
        ("Rust Error", "rust-error"),
        ("  unsafe_checker ", "unsafe-checker"),
    ],
)
def test_slugify(name, expected):
    assert slugify(name) == expected


def test_cjk_detection_and_width():
    assert contains_cjk("所有权")
    assert not contains_cjk("ownership")
    assert display_width("ab所有") == 6
