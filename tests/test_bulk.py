"""Unit tests for bulk queries: any_allowed, all_allowed, none_allowed."""

import pytest

from privileged import InvalidArgumentError, PrivilegeBuilder, PrivilegeContext


@pytest.fixture
def context() -> PrivilegeContext:
    """Read allowed on Post and Comment, forbidden on Secret."""
    return PrivilegeBuilder().allow("read", ["Post", "Comment"]).allow("*", "Secret").forbid("read", "Secret").build()


SUBJECT_LISTS = [
    [],
    ["Post"],
    ["Post", "Comment"],
    ["Post", "User"],
    ["User", "Secret"],
    ["Secret", "Comment", "Post"],
    [None, "Post"],
]
SUBJECT_IDS = ["empty", "one-allowed", "all-allowed", "mixed", "none-allowed", "forbid-first", "with-none"]


class TestBulkLaws:
    """The bulk helpers agree with per-subject allowed()."""

    @pytest.mark.parametrize("subjects", SUBJECT_LISTS, ids=SUBJECT_IDS)
    def test_any_allowed(self, context: PrivilegeContext, subjects: list) -> None:
        """any_allowed == exists(allowed)."""
        assert context.any_allowed("read", subjects) == any(context.allowed("read", s) for s in subjects)

    @pytest.mark.parametrize("subjects", SUBJECT_LISTS, ids=SUBJECT_IDS)
    def test_all_allowed(self, context: PrivilegeContext, subjects: list) -> None:
        """all_allowed == forall(allowed)."""
        assert context.all_allowed("read", subjects) == all(context.allowed("read", s) for s in subjects)

    @pytest.mark.parametrize("subjects", SUBJECT_LISTS, ids=SUBJECT_IDS)
    def test_none_allowed(self, context: PrivilegeContext, subjects: list) -> None:
        """none_allowed == not any_allowed."""
        assert context.none_allowed("read", subjects) == (not context.any_allowed("read", subjects))

    def test_empty_subjects(self, context: PrivilegeContext) -> None:
        """Empty input: any is False, all and none are True."""
        assert context.any_allowed("read", []) is False
        assert context.all_allowed("read", []) is True
        assert context.none_allowed("read", []) is True

    @pytest.mark.parametrize(
        ("subject", "expected"),
        [("Post", (True, True, False)), ("User", (False, False, True)), ("Secret", (False, False, True))],
        ids=["allowed", "no-rule", "forbidden"],
    )
    def test_single_string_is_one_subject(self, context: PrivilegeContext, subject: str, expected: tuple) -> None:
        """Given one subject as a plain string, it is checked whole, not per character."""
        # Act
        results = (
            context.any_allowed("read", subject),
            context.all_allowed("read", subject),
            context.none_allowed("read", subject),
        )

        # Assert
        assert results == expected
        assert results[0] == context.allowed("read", subject)

    def test_ignores_qualifiers(self) -> None:
        """Subjects are checked without a qualifier, so scoped rules count."""
        context = PrivilegeBuilder().allow("read", "Post", ["title"]).build()

        assert context.all_allowed("read", ["Post"]) is True


class TestShortCircuit:
    """Bulk helpers stop consuming subjects once the answer is known."""

    @staticmethod
    def _tracking(subjects: list[str], seen: list[str]):
        for subject in subjects:
            seen.append(subject)
            yield subject

    def test_any_stops_at_first_allowed(self, context: PrivilegeContext) -> None:
        seen: list[str] = []

        assert context.any_allowed("read", self._tracking(["User", "Post", "Comment"], seen)) is True
        assert seen == ["User", "Post"]

    def test_all_stops_at_first_denied(self, context: PrivilegeContext) -> None:
        seen: list[str] = []

        assert context.all_allowed("read", self._tracking(["Post", "Secret", "Comment"], seen)) is False
        assert seen == ["Post", "Secret"]

    def test_none_stops_at_first_allowed(self, context: PrivilegeContext) -> None:
        seen: list[str] = []

        assert context.none_allowed("read", self._tracking(["Secret", "Post", "User"], seen)) is False
        assert seen == ["Secret", "Post"]


class TestBulkArguments:
    """Bulk helpers reject bad arguments instead of denying."""

    @pytest.mark.parametrize("action", [None, "", "   "], ids=["none", "empty", "blank"])
    @pytest.mark.parametrize("method", ["any_allowed", "all_allowed", "none_allowed"])
    def test_rejects_blank_action(self, context: PrivilegeContext, method: str, action) -> None:
        """Given a None or blank action, raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="Action cannot be None or whitespace"):
            getattr(context, method)(action, ["Post"])

    @pytest.mark.parametrize("method", ["any_allowed", "all_allowed", "none_allowed"])
    def test_rejects_none_subjects(self, context: PrivilegeContext, method: str) -> None:
        """Given None subjects, raises InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="Subjects cannot be None"):
            getattr(context, method)("read", None)
