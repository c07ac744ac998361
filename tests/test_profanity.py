import pytest

from utils.profanity import clean_body

BANNED = ["kerfuffle", "sharbert", "fornax"]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("I love kerfuffle and KERFUFFLE", "I love **** and ****"),
        ("hello world", "hello world"),
        ("This is a kerfuffle opinion I need to share with the world",
         "This is a **** opinion I need to share with the world"),
        ("I hear Mastodon is better than Chirpy. sharbert I need to migrate",
         "I hear Mastodon is better than Chirpy. **** I need to migrate"),
        ("I really need a kerfuffle to go to bed sooner, Fornax !",
         "I really need a **** to go to bed sooner, **** !"),
        ("Sharbert!", "Sharbert!"),
        ("", ""),
    ],
)
def test_clean_body(text, expected):
    assert clean_body(text, BANNED) == expected


def test_clean_body_keeps_spacing():
    assert clean_body("a  fornax  b", BANNED) == "a  ****  b"
