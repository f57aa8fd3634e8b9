"""Tests for the comment-aware INI parser."""

from moddex_bootstrap.config import CommentAwareConfigParser


def test_inline_comment_is_stripped():
    parser = CommentAwareConfigParser()
    parser.read_string("[DEFAULT]\nowner = acme  # the org\n")

    assert parser.get("DEFAULT", "owner") == "acme"


def test_hash_without_double_space_is_kept():
    parser = CommentAwareConfigParser()
    parser.read_string("[DEFAULT]\nasset_suffix = -build#3.tar.gz\n")

    assert parser.get("DEFAULT", "asset_suffix") == "-build#3.tar.gz"


def test_percent_signs_are_not_interpolated():
    parser = CommentAwareConfigParser()
    parser.read_string("[DEFAULT]\nasset_suffix = -100%.tar.gz\n")

    assert parser.get("DEFAULT", "asset_suffix") == "-100%.tar.gz"
