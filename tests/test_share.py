import base64

from conftest import CURRENT_YEAR
from dcplanner.data_model import default_payload, user_input_from_payload
from dcplanner.engine.share import decode_share, encode_share, restore_user_input


def test_share_token_round_trip(payload):
    token = encode_share(payload)

    assert decode_share(token, CURRENT_YEAR) == payload


def test_decodes_token_made_by_browser_form():
    # btoa(encodeURIComponent('{"nickname":"김","familySize":4}'))
    token = base64.b64encode(b"%7B%22nickname%22%3A%22%EA%B9%80%22%2C%22familySize%22%3A4%7D").decode("ascii")

    decoded = decode_share(token, CURRENT_YEAR)

    assert decoded["nickname"] == "김"
    assert decoded["familySize"] == 4
    assert decoded["retirementAge"] == default_payload(CURRENT_YEAR)["retirementAge"]


def test_malformed_token_falls_back_to_defaults():
    assert decode_share("not-base64!!", CURRENT_YEAR) == default_payload(CURRENT_YEAR)
    list_token = base64.b64encode(b"%5B1%2C2%5D").decode("ascii")
    assert decode_share(list_token, CURRENT_YEAR) == default_payload(CURRENT_YEAR)


def test_invalid_shared_input_restores_defaults(payload):
    payload["familySize"] = 9
    token = encode_share(payload)

    restored = restore_user_input(token, CURRENT_YEAR)

    assert restored == user_input_from_payload(default_payload(CURRENT_YEAR))


def test_valid_shared_input_is_restored(payload):
    restored = restore_user_input(encode_share(payload), CURRENT_YEAR)

    assert restored == user_input_from_payload(payload)
