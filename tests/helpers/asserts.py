from typing import Optional, Dict, Any
from fastapi.testclient import TestClient

def api_call(client: TestClient, method: str, path: str, headers: Optional[Dict[str, str]] = None, json: Optional[Dict[str, Any]] = None, expected_min: int = 200, expected_max: int = 300, **kwargs):
    response = client.request(method, path, headers=headers, json=json, **kwargs)
    ok = expected_min <= response.status_code < expected_max
    try:
        body = response.json()
    except ValueError:
        body = response.text
    assert ok, f"{method} {path} => {response.status_code}, body={body}, json={json}"
    return response

def assert_error(response, status_code: int, code: str, message: Optional[str] = None):
    assert response.status_code == status_code, response.text
    error = response.json()["error"]
    assert error["code"] == code
    if message is not None:
        assert error["message"] == message
    return error

def assert_shape(data, schema):
    """Fail if ``data`` (an object or a list of objects) does not parse as ``schema``."""
    items = data if isinstance(data, list) else [data]
    for item in items:
        schema.model_validate(item)
