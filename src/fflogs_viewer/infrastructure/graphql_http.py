from typing import Any

import httpx


async def post_for_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    json_body: dict[str, Any] | None = None,
    form: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    auth: tuple[str, str] | None = None,
) -> dict[str, Any] | None:
    """POST once and decode the body.

    Error statuses are not raised: the API explains them in the body, and the
    HTTP status is copied in as ``status`` when the body does not carry one.
    Returns None when the body is not a JSON object. Transport failures raise.
    """
    response = await client.post(url, json=json_body, data=form, headers=headers, auth=auth)
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    if response.status_code >= 400 and "status" not in payload:
        payload["status"] = response.status_code
    return payload
