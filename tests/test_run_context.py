"""Tests for run_context.py.

Tests for the run context and scoped resource-collection leases.
"""

import pytest
from converge.core.errors import CollectionLeaseError
from converge.resources import ResourceCollection
from converge.run_context import CollectionLease, RunContext


class TestRunContext:
    """Tests for RunContext construction."""

    def test_exposes_collaborators(self, run_context, node, cookbook_collection, events):
        """Test node, cookbooks and events are the objects passed in."""
        assert run_context.node is node
        assert run_context.cookbook_collection is cookbook_collection
        assert run_context.events is events

    def test_starts_with_empty_collection(self, run_context):
        """Test a default run context has an empty collection."""
        assert isinstance(run_context.resource_collection, ResourceCollection)
        assert len(run_context.resource_collection) == 0

    def test_accepts_initial_collection(self, node, cookbook_collection, events):
        """Test the driver can supply the initial collection."""
        collection = ResourceCollection()
        run_context = RunContext(node, cookbook_collection, events, resource_collection=collection)

        assert run_context.resource_collection is collection

    def test_why_run_defaults_off(self, run_context):
        """Test why-run is off unless configured."""
        assert run_context.why_run is False

    def test_why_run_explicit(self, node, cookbook_collection, events):
        """Test an explicit why_run value wins over settings."""
        run_context = RunContext(node, cookbook_collection, events, why_run=True)

        assert run_context.why_run is True

    def test_collection_is_read_only(self, run_context):
        """Test the collection slot cannot be assigned directly."""
        with pytest.raises(AttributeError):
            run_context.resource_collection = ResourceCollection()


class TestCollectionLease:
    """Tests for acquire_resource_collection and CollectionLease."""

    def test_acquire_installs_fresh_collection(self, run_context):
        """Test acquiring without a collection installs a new empty one."""
        original = run_context.resource_collection

        lease = run_context.acquire_resource_collection()

        assert isinstance(lease, CollectionLease)
        assert run_context.resource_collection is lease.collection
        assert lease.collection is not original
        assert lease.previous is original
        assert len(lease.collection) == 0

    def test_release_restores_previous(self, run_context):
        """Test release puts back the exact previous reference."""
        original = run_context.resource_collection
        lease = run_context.acquire_resource_collection()

        lease.release()

        assert run_context.resource_collection is original
        assert lease.released

    def test_release_is_idempotent(self, run_context):
        """Test a second release does not clobber a later swap."""
        original = run_context.resource_collection
        first = run_context.acquire_resource_collection()
        first.release()
        second = run_context.acquire_resource_collection()

        first.release()

        assert run_context.resource_collection is second.collection
        second.release()
        assert run_context.resource_collection is original

    def test_context_manager_releases_on_error(self, run_context):
        """Test the with-block restores the collection when it raises."""
        original = run_context.resource_collection

        with pytest.raises(KeyError):
            with run_context.acquire_resource_collection() as collection:
                assert run_context.resource_collection is collection
                raise KeyError("boom")

        assert run_context.resource_collection is original

    def test_acquire_specific_collection(self, run_context):
        """Test a caller-supplied collection is installed as-is."""
        collection = ResourceCollection()

        with run_context.acquire_resource_collection(collection) as active:
            assert active is collection
            assert run_context.resource_collection is collection

    def test_nested_leases_stack(self, run_context):
        """Test nested leases restore in reverse order."""
        original = run_context.resource_collection

        with run_context.acquire_resource_collection() as outer:
            with run_context.acquire_resource_collection() as inner:
                assert run_context.resource_collection is inner
            assert run_context.resource_collection is outer

        assert run_context.resource_collection is original

    def test_out_of_order_release_rejected(self, run_context):
        """Test releasing an outer lease while an inner one is held raises."""
        original = run_context.resource_collection
        outer = run_context.acquire_resource_collection()
        inner = run_context.acquire_resource_collection()

        with pytest.raises(CollectionLeaseError):
            outer.release()

        assert not outer.released
        assert run_context.resource_collection is inner.collection
        inner.release()
        outer.release()
        assert run_context.resource_collection is original
