"""Unit tests for workflow.content_key module."""

import pytest

from cms_backend_azure.workflow.content_key import (
    CMS_BRANCH_PREFIX,
    branch_from_collection_slug,
    branch_from_content_key,
    content_key_from_branch,
    generate_content_key,
)
from cms_backend_azure.workflow.errors import InvalidContentKeyError


class TestGenerateContentKey:
    """Test cases for generate_content_key."""

    def test_joins_collection_and_slug(self):
        assert generate_content_key("posts", "hello-world") == "posts/hello-world"

    def test_nested_slug_is_kept(self):
        assert generate_content_key("docs", "guides/setup") == "docs/guides/setup"

    @pytest.mark.parametrize("collection,slug", [("", "slug"), ("posts", ""), ("", "")])
    def test_empty_input_rejected(self, collection, slug):
        with pytest.raises(InvalidContentKeyError):
            generate_content_key(collection, slug)

    def test_nested_collection_is_kept(self):
        assert generate_content_key("blog/posts", "a") == "blog/posts/a"

    def test_error_is_value_error(self):
        """Caller-input errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            generate_content_key("", "a")


class TestBranchMapping:
    """Test cases for branch <-> content key mapping."""

    def test_branch_has_cms_prefix(self):
        assert branch_from_content_key("posts/hello") == f"{CMS_BRANCH_PREFIX}/posts/hello"

    def test_key_from_branch_strips_prefix(self):
        assert content_key_from_branch("cms/posts/hello") == "posts/hello"

    @pytest.mark.parametrize(
        "collection,slug",
        [
            ("posts", "hello-world"),
            ("docs", "guides/setup/linux"),
            ("pages", "a"),
            ("posts", "2024-01-01-new-year"),
            ("authors", "jane_doe.v2"),
            ("blog/posts", "a"),
            ("docs/guides", "setup/linux"),
        ],
    )
    def test_round_trip(self, collection, slug):
        """key -> branch -> key is the identity, and branches are re-derivable."""
        key = generate_content_key(collection, slug)
        branch = branch_from_content_key(key)

        assert content_key_from_branch(branch) == key
        assert branch_from_collection_slug(collection, slug) == branch

    def test_distinct_pairs_give_distinct_branches(self):
        branches = {
            branch_from_collection_slug("posts", "a"),
            branch_from_collection_slug("posts", "b"),
            branch_from_collection_slug("pages", "a"),
        }
        assert len(branches) == 3

    @pytest.mark.parametrize("branch", ["main", "feature/cms/x", "cms/", "cms"])
    def test_non_draft_branch_rejected(self, branch):
        with pytest.raises(InvalidContentKeyError, match="not a draft branch"):
            content_key_from_branch(branch)

    def test_empty_key_rejected(self):
        with pytest.raises(InvalidContentKeyError):
            branch_from_content_key("")

