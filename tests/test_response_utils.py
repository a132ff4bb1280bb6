"""Tests for response payload builders."""
from interaction_router.response_utils import (
    autocomplete_response,
    deferred_response,
    get_error_response,
    message_response,
    pong_response,
)


def test_pong():
    assert pong_response() == {"type": 1}


def test_message_flags_only_when_ephemeral():
    assert message_response(content="hi") == {"type": 4, "data": {"content": "hi"}}
    assert message_response(content="hi", ephemeral=True)["data"]["flags"] == 64


def test_deferred():
    assert deferred_response() == {"type": 5}
    assert deferred_response(ephemeral=True) == {"type": 5, "data": {"flags": 64}}


def test_autocomplete_choices_capped():
    choices = [{"name": str(i), "value": str(i)} for i in range(30)]
    response = autocomplete_response(choices)

    assert response["type"] == 8
    assert response["data"]["choices"] == choices[:25]


def test_error_responses_are_ephemeral_200():
    unsupported, status = get_error_response('unsupported', 'nope')
    assert status == 200
    assert unsupported["data"]["flags"] == 64
    assert unsupported["data"]["embeds"][0]["description"] == "`nope` is not supported by this application."

    internal, status = get_error_response()
    assert status == 200
    assert internal["data"]["embeds"][0]["title"] == "Internal Error"
