"""Tests for issue normalization."""

import copy

from issue_finder.models import Issue
from issue_finder.normalizer import decode_raw_issue, normalize_issue, normalize_issues


class TestNormalizeIssue:
    def test_maps_fields(self, sample_raw_issues):
        issue = normalize_issue(sample_raw_issues[0], "octo/app")
        assert issue == Issue(
            repo="octo/app",
            number=12,
            title="Crash on startup",
            url="https://github.com/octo/app/issues/12",
            state="open",
            labels=["bug", "p1"],
        )

    def test_repo_is_injected_not_read(self, sample_raw_issues):
        raw = dict(sample_raw_issues[1], repo="someone/else")
        assert normalize_issue(raw, "octo/app").repo == "octo/app"

    def test_missing_state_dropped(self, sample_raw_issues):
        raw = dict(sample_raw_issues[0])
        del raw["state"]
        assert normalize_issue(raw, "octo/app") is None

    def test_url_comes_from_html_url(self):
        raw = {"number": 1, "title": "t", "url": "https://api.github.com/x", "state": "open"}
        assert normalize_issue(raw, "octo/app") is None

    def test_non_object_dropped(self):
        assert normalize_issue("not an issue", "octo/app") is None
        assert normalize_issue(None, "octo/app") is None
        assert decode_raw_issue([1, 2]) is None

    def test_labels_with_missing_name(self):
        raw = {
            "number": 1,
            "title": "t",
            "html_url": "u",
            "state": "open",
            "labels": [{"name": "bug"}, {"foo": "bar"}],
        }
        assert normalize_issue(raw, "octo/app").labels == ["bug"]

    def test_idempotent(self, sample_raw_issues):
        raw = sample_raw_issues[0]
        before = copy.deepcopy(raw)
        assert normalize_issue(raw, "octo/app") == normalize_issue(raw, "octo/app")
        assert raw == before

        broken = {"number": "12"}
        assert normalize_issue(broken, "octo/app") is None
        assert normalize_issue(broken, "octo/app") is None


class TestNormalizeIssues:
    def test_drops_invalid_keeps_order(self, sample_raw_issues):
        no_title = {"number": 5, "html_url": "u", "state": "open"}
        raws = [sample_raw_issues[0], no_title, sample_raw_issues[1]]
        issues = normalize_issues(raws, "octo/app")
        assert [i.number for i in issues] == [12, 9]

    def test_empty(self):
        assert normalize_issues([], "octo/app") == []
