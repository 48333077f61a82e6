from dataclasses import FrozenInstanceError

import pytest

from shared.observability.context import (
    RequestContext,
    generate_request_id,
    generate_trace_id,
    is_valid_request_id,
    is_valid_trace_id,
)


def test_generated_ids_match_format():
    assert is_valid_trace_id(generate_trace_id())
    assert is_valid_request_id(generate_request_id())


def test_generated_ids_are_unique():
    assert generate_trace_id() != generate_trace_id()
    assert generate_request_id() != generate_request_id()


def test_validators_reject_wrong_prefix():
    assert not is_valid_trace_id(generate_request_id())
    assert not is_valid_request_id(generate_trace_id())
    assert not is_valid_trace_id("t-8fa21c9d")


def test_new_context_uses_source_for_trace_and_request():
    ctx = RequestContext.new("FRIENDS:bootstrap")

    assert ctx.trace_source == "FRIENDS:bootstrap"
    assert ctx.request_source == "FRIENDS:bootstrap"
    assert is_valid_trace_id(ctx.trace_id)
    assert is_valid_request_id(ctx.request_id)


def test_context_is_immutable_and_serializable():
    ctx = RequestContext.new("TEST:context")

    with pytest.raises(FrozenInstanceError):
        ctx.trace_id = "t0"  # type: ignore[misc]

    assert ctx.to_dict() == {
        "trace_id": ctx.trace_id,
        "trace_source": "TEST:context",
        "request_id": ctx.request_id,
        "request_source": "TEST:context",
    }
