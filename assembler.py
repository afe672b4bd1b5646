from dataclasses import dataclass
from text_field import TextField
from navigation import PayloadTab
from req_struct import Request, HttpMethod
from validator import validate_uri, validate_json, validate_headers


@dataclass
class SubmitPolicy:
    """
    Which validation failures stop a request
    from being handed to the transport.
    """
    # SubmitPolicy {{{
    require_valid_uri: bool = True
    require_valid_json: bool = False
    # }}}


def assemble(uri_field: TextField,
             payload_fields: dict[PayloadTab, TextField],
             method: HttpMethod | None = None) -> Request:
    """
    Builds a Request from the current field contents.
    Empty payload fields, or tabs that are not
    configured, come through as None.
    """
    # assemble {{{
    headers = _optional_text(payload_fields.get(PayloadTab.Headers))
    body = _optional_text(payload_fields.get(PayloadTab.Body))

    return Request(
        uri=uri_field.joined_text(),
        headers=headers,
        body=body,
        method=choose_method(body, method).value
    )
    # }}}


def check_request(request: Request, policy: SubmitPolicy) -> list[str]:
    """
    Lists the reasons the request may not be sent
    under the given policy. Nothing is raised, an
    empty list means the request can go out.
    """
    # check_request {{{
    problems = []

    if policy.require_valid_uri and not validate_uri(request.uri):
        problems.append(f"Invalid URI [{request.uri}]")

    if request.headers is not None and not validate_headers(request.headers):
        problems.append("Headers must be given as 'Name: value' lines")

    if policy.require_valid_json and request.body is not None:
        if not validate_json(request.body):
            problems.append("Body is not valid JSON")

    return problems
    # }}}


def choose_method(body: str | None,
                  method: HttpMethod | None = None) -> HttpMethod:
    """
    A configured method always wins, otherwise
    the presence of a body selects POST.
    """
    # choose_method {{{
    if method is not None:
        return method
    if body is not None:
        return HttpMethod.POST
    return HttpMethod.GET
    # }}}


def _optional_text(text_field: TextField | None) -> str | None:
    if text_field is None:
        return None

    text = text_field.joined_text()
    if text.strip() == "":
        return None
    return text
