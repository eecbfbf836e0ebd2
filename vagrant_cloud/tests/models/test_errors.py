import httpx
import pytest

from vagrant_cloud.exceptions import ResponseDecodeError
from vagrant_cloud.models.errors import APIErrorResponse


def test_render_joins_messages_and_fields() -> None:
    error = APIErrorResponse(errors={"name": ["is required"], "box": ["invalid", "too long"]})

    rendered = error.render()

    # Field order is not guaranteed.
    assert rendered in (
        "name is required. box invalid,too long",
        "box invalid,too long. name is required",
    )
    assert "name is required" in rendered
    assert "box invalid,too long" in rendered


def test_render_single_field() -> None:
    error = APIErrorResponse(errors={"version": ["has already been taken"]})

    assert error.render() == "version has already been taken"


def test_render_empty_errors() -> None:
    assert APIErrorResponse().render() == ""


def test_str_is_render() -> None:
    error = APIErrorResponse(errors={"name": ["is required"]})

    assert str(error) == error.render()


def test_from_dict_reads_errors_mapping() -> None:
    error = APIErrorResponse.from_dict({"errors": {"name": ["is required"]}, "success": False})

    assert error.errors == {"name": ["is required"]}


@pytest.mark.parametrize(
    "data",
    [
        None,
        [],
        {},
        {"errors": ["Resource not found!"]},
        {"errors": None},
    ],
)
def test_from_dict_tolerates_unexpected_shapes(data: object) -> None:
    assert APIErrorResponse.from_dict(data).errors == {}


def test_from_dict_skips_fields_without_message_list() -> None:
    error = APIErrorResponse.from_dict({"errors": {"name": "is required", "box": ["invalid"]}})

    assert error.errors == {"box": ["invalid"]}


def test_from_response_decodes_body() -> None:
    response = httpx.Response(
        httpx.codes.UNPROCESSABLE_ENTITY,
        json={"errors": {"box": ["invalid", "too long"]}},
    )

    error = APIErrorResponse.from_response(response)

    assert error.render() == "box invalid,too long"


def test_from_response_raises_on_invalid_json() -> None:
    response = httpx.Response(httpx.codes.INTERNAL_SERVER_ERROR, content=b"oops")

    with pytest.raises(ResponseDecodeError):
        APIErrorResponse.from_response(response)
