from unittest.mock import MagicMock


def fake_response(status=200, json_data=None, headers=None, reason="OK", invalid_json=False):
    """A stand-in for requests.Response with just the parts the clients read."""
    r = MagicMock()
    r.status_code = status
    r.ok = status < 400
    r.reason = reason
    r.headers = headers or {}
    if invalid_json:
        r.json.side_effect = ValueError("Expecting value")
    else:
        r.json.return_value = json_data
    return r


def graphql_count(connection, count):
    return {"data": {"repository": {connection: {"totalCount": count}}}}
