"""Tests for GitHub response models."""

from gh_link.github_client.cache import auth_principal, request_signature
from gh_link.github_client.models import IssueResponse, PaginationMeta
from gh_link.github_client.transport import ApiRequest


class TestPaginationMeta:
    def test_from_links(self) -> None:
        meta = PaginationMeta.from_links(
            {
                "prev": "https://api.github.com/issues?page=1&per_page=10",
                "next": "https://api.github.com/issues?per_page=10&page=3",
                "first": "https://api.github.com/issues?page=1",
                "last": "https://api.github.com/issues?page=9",
            }
        )
        assert (meta.first, meta.prev, meta.next, meta.last) == (1, 1, 3, 9)

    def test_from_links_ignores_unknown_relations(self) -> None:
        meta = PaginationMeta.from_links(
            {"self": "https://x?page=1", "next": "https://x"}
        )
        assert meta.next is None
        assert meta.last is None


class TestIssueResponse:
    def test_extra_fields_are_kept(self) -> None:
        issue = IssueResponse.model_validate(
            {
                "id": 1,
                "number": 2,
                "title": "t",
                "state": "open",
                "html_url": "https://github.com/foo/bar/issues/2",
                "labels": [{"name": "bug", "color": "ff0000"}, "plain"],
                "reactions": {"+1": 3},
            }
        )
        assert issue.labels[0].name == "bug"
        assert issue.labels[1] == "plain"
        assert issue.model_extra == {"reactions": {"+1": 3}}


class TestRequestSignature:
    def test_param_order_does_not_matter(self) -> None:
        first = ApiRequest(url="/issues", params={"state": "open", "per_page": 10})
        second = ApiRequest(url="/issues", params={"per_page": 10, "state": "open"})
        assert request_signature(first, "t") == request_signature(second, "t")

    def test_token_is_part_of_signature_but_not_exposed(self) -> None:
        request = ApiRequest(url="/issues")
        signature = request_signature(request, "secret-token")
        assert signature != request_signature(request, "other-token")
        assert "secret-token" not in signature
        assert auth_principal(None) == "anonymous"
