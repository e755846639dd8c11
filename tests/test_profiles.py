"""Unit tests for the profile store, selection and inheritance.

Tests cover:
- Store ordering and consuming removal
- Selection by name and by file order
- Child fields never overwritten by inheritance
- Multi-level chains, cycles, self-reference and missing parents
"""

import pytest

from eventmail.config.models import Profile, TextMode
from eventmail.profiles import (
    InheritanceLoopOrMissingError,
    ProfileNotCallableError,
    ProfileNotFoundError,
    ProfileStore,
    fill_unset,
    inherit_from,
    resolve_inheritance,
    resolve_profile,
    select_profile,
)


class CountingStore(ProfileStore):
    """ProfileStore that counts remove_by_name lookups."""

    def __init__(self, profiles):
        super().__init__(profiles)
        self.lookups = []

    def remove_by_name(self, name):
        self.lookups.append(name)
        return super().remove_by_name(name)


class TestProfileStore:
    """Test the ordered, consuming profile store."""

    def test_preserves_insertion_order(self):
        store = ProfileStore({"b": Profile(), "a": Profile(), "c": Profile()})
        assert store.names() == ["b", "a", "c"]

    def test_remove_by_name_consumes_entry(self):
        store = ProfileStore({"a": Profile(server="x")})

        assert store.remove_by_name("a").server == "x"
        assert "a" not in store
        assert store.remove_by_name("a") is None

    def test_remove_first(self):
        store = ProfileStore({"first": Profile(), "second": Profile()})

        name, _ = store.remove_first()

        assert name == "first"
        assert store.names() == ["second"]

    def test_remove_first_on_empty_store(self):
        assert ProfileStore().remove_first() is None

    def test_profiles_are_only_fetched_by_removal(self):
        public = {attr for attr in dir(ProfileStore) if not attr.startswith("_")}

        assert public == {"names", "remove_by_name", "remove_first", "documented"}

    def test_documented_lists_only_profiles_with_doc(self):
        store = ProfileStore(
            {
                "base": Profile(server="smtp.example.com"),
                "weekly": Profile(doc="Weekly talk"),
                "monthly": Profile(doc="Monthly meetup"),
            }
        )
        assert store.documented() == [("weekly", "Weekly talk"), ("monthly", "Monthly meetup")]


class TestMerge:
    """Test field-by-field merging."""

    def test_child_fields_are_never_overwritten(self):
        child = Profile(
            server="child.example.com",
            port=587,
            to=["child@example.com"],
            body="child body",
            mode=TextMode.BODY_ONLY,
        )
        parent = Profile(
            server="parent.example.com",
            port=25,
            to=["parent@example.com"],
            body="parent body",
            subject="parent subject",
            mode=TextMode.SUBJECT_BODY,
        )

        merged = inherit_from(child, parent)

        assert merged.server == "child.example.com"
        assert merged.port == 587
        assert merged.to == ["child@example.com"]
        assert merged.body == "child body"
        assert merged.mode is TextMode.BODY_ONLY
        assert merged.subject == "parent subject"

    @pytest.mark.parametrize("field", Profile.MERGEABLE_FIELDS)
    def test_every_mergeable_field_set_on_child_wins(self, field):
        child_value = 2525 if field == "port" else (["c@example.com"] if field == "to" else "child")
        parent_value = 25 if field == "port" else (["p@example.com"] if field == "to" else "parent")
        if field == "mode":
            child_value, parent_value = TextMode.BODY_ONLY, TextMode.SUBJECT_BODY

        merged = inherit_from(
            Profile(**{field: child_value}), Profile(**{field: parent_value})
        )

        assert getattr(merged, field) == child_value

    def test_from_field_inherits_by_alias(self):
        parent = Profile.model_validate({"from": "Events <events@example.com>"})

        merged = inherit_from(Profile(), parent)

        assert merged.from_ == "Events <events@example.com>"

    def test_inherit_comes_from_parent_and_doc_is_dropped(self):
        child = Profile(doc="child doc", inherit="parent")
        parent = Profile(doc="parent doc", inherit="grandparent")

        merged = inherit_from(child, parent)

        assert merged.inherit == "grandparent"
        assert merged.doc is None

    def test_fill_unset_leaves_doc_and_inherit_alone(self):
        target = Profile(doc="keep", inherit="base")
        merged = fill_unset(target, Profile(user="u", doc="other", inherit="other"))

        assert merged.user == "u"
        assert merged.doc == "keep"
        assert merged.inherit == "base"

    def test_merge_does_not_mutate_inputs(self):
        child = Profile()
        parent = Profile(server="smtp.example.com")

        inherit_from(child, parent)

        assert child.server is None


class TestSelectProfile:
    """Test profile selection."""

    def test_select_by_name(self):
        store = ProfileStore({"a": Profile(doc="A"), "b": Profile(doc="B")})

        name, profile = select_profile(store, "b")

        assert name == "b"
        assert profile.doc == "B"
        assert "b" not in store

    def test_select_first_by_default(self):
        store = ProfileStore({"a": Profile(doc="A"), "b": Profile(doc="B")})

        name, _ = select_profile(store)

        assert name == "a"
        assert store.names() == ["b"]

    def test_unknown_name(self):
        store = ProfileStore({"a": Profile(doc="A")})

        with pytest.raises(ProfileNotFoundError) as exc_info:
            select_profile(store, "missing")

        assert "'missing' was passed, but does not exist" in str(exc_info.value)

    def test_empty_store(self):
        with pytest.raises(ProfileNotFoundError):
            select_profile(ProfileStore())

    def test_profile_without_doc_is_not_callable(self):
        store = ProfileStore({"base": Profile(server="smtp.example.com")})

        with pytest.raises(ProfileNotCallableError) as exc_info:
            select_profile(store, "base")

        assert "no 'doc'" in str(exc_info.value)


class TestResolveInheritance:
    """Test recursive inheritance resolution."""

    def test_parent_fills_unset_server(self):
        store = ProfileStore(
            {
                "B": Profile(doc="B", inherit="C"),
                "C": Profile(server="smtp.example.com"),
            }
        )

        _, resolved = resolve_profile(store, "B")

        assert resolved.server == "smtp.example.com"
        assert resolved.inherit is None
        assert resolved.doc is None

    def test_profile_without_parent_only_loses_doc(self):
        store = ProfileStore({"solo": Profile(doc="Solo", server="smtp.example.com")})

        _, resolved = resolve_profile(store)

        assert resolved.server == "smtp.example.com"
        assert resolved.doc is None

    def test_chain_resolves_in_one_lookup_per_ancestor(self):
        store = CountingStore(
            {
                "p0": Profile(inherit="p1"),
                "p1": Profile(inherit="p2", port=587),
                "p2": Profile(inherit="p3", server="smtp.example.com"),
                "p3": Profile(user="events", port=25),
            }
        )
        profile = store.remove_by_name("p0")
        store.lookups.clear()

        resolved = resolve_inheritance(profile, store, "p0")

        assert store.lookups == ["p1", "p2", "p3"]
        assert resolved.port == 587
        assert resolved.server == "smtp.example.com"
        assert resolved.user == "events"

    def test_nearest_ancestor_wins(self):
        store = ProfileStore(
            {
                "child": Profile(doc="x", inherit="parent"),
                "parent": Profile(inherit="grandparent", subject="from parent"),
                "grandparent": Profile(subject="from grandparent", body="from grandparent"),
            }
        )

        _, resolved = resolve_profile(store, "child")

        assert resolved.subject == "from parent"
        assert resolved.body == "from grandparent"

    def test_two_profile_cycle_fails_on_second_lookup(self):
        store = CountingStore(
            {
                "D": Profile(doc="D", inherit="E"),
                "E": Profile(inherit="D"),
            }
        )

        with pytest.raises(InheritanceLoopOrMissingError) as exc_info:
            resolve_profile(store, "D")

        assert exc_info.value.name == "D"
        assert exc_info.value.chain == ["D", "E"]
        # Selection of D, then E, then the repeated D
        assert len(store.lookups) <= 3

    def test_self_reference_fails(self):
        store = ProfileStore({"loop": Profile(doc="x", inherit="loop")})

        with pytest.raises(InheritanceLoopOrMissingError) as exc_info:
            resolve_profile(store, "loop")

        assert exc_info.value.name == "loop"

    def test_missing_parent_fails(self):
        store = ProfileStore({"a": Profile(doc="x", inherit="nowhere")})

        with pytest.raises(InheritanceLoopOrMissingError) as exc_info:
            resolve_profile(store, "a")

        message = str(exc_info.value)
        assert "nowhere" in message
        assert "either does not exist or inheritance loop exists" in message

    def test_cycle_through_consumed_ancestor(self):
        store = ProfileStore(
            {
                "a": Profile(doc="x", inherit="b"),
                "b": Profile(inherit="c"),
                "c": Profile(inherit="b"),
            }
        )

        with pytest.raises(InheritanceLoopOrMissingError) as exc_info:
            resolve_profile(store, "a")

        assert exc_info.value.chain == ["a", "b", "c"]

    def test_parent_without_doc_is_consumed(self):
        store = ProfileStore(
            {
                "a": Profile(doc="A", inherit="base"),
                "base": Profile(server="smtp.example.com"),
                "other": Profile(doc="Other"),
            }
        )

        resolve_profile(store, "a")

        assert store.names() == ["other"]
