import requests
from validator import validate_json
from req_struct import Request, Response, TransportError


DEFAULT_TIMEOUT = 10.0  # Seconds


def send_request(request: Request,
                 timeout: float = DEFAULT_TIMEOUT) -> Response:
    """
    Sends an assembled request, wrapping any failure
    of requests in a TransportError so callers
    only deal with one exception type.
    """
    # send_request {{{
    try:
        return _send_request(request, timeout)
    except (requests.RequestException, UnicodeError) as exception:
        raise TransportError(str(exception)) from exception
    # }}}


def _send_request(request: Request, timeout: float) -> Response:
    # _send_request {{{
    headers = parse_headers(request.headers)
    data = None

    if request.body is not None:
        has_type = any(key.lower() == "content-type" for key in headers)
        if not has_type and validate_json(request.body):
            headers["Content-Type"] = "application/json"
        data = request.body.encode("utf-8")

    response = requests.request(
        request.method.upper(), request.uri,
        headers=headers, data=data, timeout=timeout)

    return Response(
        status=response.status_code,
        body=response.text,
        reason=response.reason,
        url=response.url,
        headers=dict(response.headers)
    )
    # }}}


def parse_headers(text: str | None) -> dict:
    """
    Responsible for the 'Name: value' lines of the
    headers field. Only the first colon separates
    the name, values may hold colons themselves.
    """
    # parse_headers {{{
    headers = {}
    if text is None:
        return headers

    for line in text.splitlines():
        if line.strip() == "":
            continue

        key, colon, value = line.partition(":")
        if colon == "" or key.strip() == "":
            raise TransportError(f"Malformed header line [{line.strip()}]")
        headers[key.strip()] = value.strip()

    return headers
    # }}}
