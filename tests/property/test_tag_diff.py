"""
Property-based tests for the tag differ.

Properties:
- Applying the diff to the current tags yields exactly the desired tags
- Diffing a tag set against itself yields an empty diff
- A protected key present in current and absent from desired is never deleted
"""

from hypothesis import given, strategies as st

from eks_tagging.services.tag_diff import get_tag_updates, get_tag_updates_with_exemption


# =============================================================================
# Strategies for generating test data
# =============================================================================

# Small key alphabet so current and desired overlap often
tag_key_strategy = st.text(alphabet="abcdef:/-", min_size=1, max_size=4)
tag_value_strategy = st.text(alphabet="xyz01", max_size=3)
tag_set_strategy = st.dictionaries(tag_key_strategy, tag_value_strategy, max_size=8)
key_set_strategy = st.frozensets(tag_key_strategy, max_size=5)


@given(current=tag_set_strategy, desired=tag_set_strategy)
def test_applying_diff_converges_to_desired(current, desired):
    """Delete then upsert turns current into desired."""
    diff = get_tag_updates(current, desired)

    assert diff.apply(current) == desired


@given(tags=tag_set_strategy)
def test_diff_is_idempotent(tags):
    """Once converged, there is nothing left to do."""
    diff = get_tag_updates(tags, tags)

    assert diff.to_delete == set()
    assert diff.to_upsert == {}


@given(current=tag_set_strategy, desired=tag_set_strategy)
def test_upserts_and_deletes_are_disjoint(current, desired):
    diff = get_tag_updates(current, desired)

    assert not diff.to_delete & set(diff.to_upsert)


@given(current=tag_set_strategy, desired=tag_set_strategy, protected=key_set_strategy)
def test_protected_keys_are_never_deleted(current, desired, protected):
    diff = get_tag_updates_with_exemption(current, desired, protected)

    assert not diff.to_delete & protected


@given(current=tag_set_strategy, desired=tag_set_strategy, protected=key_set_strategy)
def test_exempt_diff_converges_except_for_protected_keys(current, desired, protected):
    """Result equals desired plus whichever protected keys were already there."""
    diff = get_tag_updates_with_exemption(current, desired, protected)

    kept = {k: v for k, v in current.items() if k in protected and k not in desired}
    assert diff.apply(current) == {**desired, **kept}
