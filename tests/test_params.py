import boto3
import pytest
from botocore.stub import Stubber

from diagnostic_server.core.config import Settings
from diagnostic_server.core.errors import ConfigFetchError, ConfigParseError
from diagnostic_server.services.params import build_ssm_client, fetch_secret_json, resolve_startup_params

PARAM_NAME = "/diag/startup-params"


@pytest.fixture
def ssm():
    client = boto3.client(
        "ssm",
        region_name="us-east-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )
    with Stubber(client) as stubber:
        yield client, stubber
        stubber.assert_no_pending_responses()


def _stub_param(stubber, param_type="String", value='{"color": "blue", "limits": [1, 2]}'):
    stubber.add_response(
        "get_parameter",
        {"Parameter": {"Name": PARAM_NAME, "Type": param_type, "Value": value}},
        {"Name": PARAM_NAME},
    )


def test_fetch_parses_string_parameter(ssm):
    client, stubber = ssm
    _stub_param(stubber)
    assert fetch_secret_json(PARAM_NAME, client) == {"color": "blue", "limits": [1, 2]}


def test_fetch_rejects_non_string_parameter(ssm):
    client, stubber = ssm
    _stub_param(stubber, param_type="SecureString")
    with pytest.raises(ConfigFetchError, match='Param must be "String" type: SecureString'):
        fetch_secret_json(PARAM_NAME, client)


def test_fetch_annotates_invalid_json(ssm):
    client, stubber = ssm
    _stub_param(stubber, value="{not json")
    with pytest.raises(ConfigParseError) as excinfo:
        fetch_secret_json(PARAM_NAME, client)
    assert str(excinfo.value).startswith("Invalid param JSON -- ")


def test_fetch_wraps_service_errors(ssm):
    client, stubber = ssm
    stubber.add_client_error("get_parameter", service_error_code="ParameterNotFound", http_status_code=400)
    with pytest.raises(ConfigFetchError, match=PARAM_NAME):
        fetch_secret_json(PARAM_NAME, client)


def test_ssm_client_is_single_attempt_with_timeout():
    client = build_ssm_client(Settings(secret_fetch_timeout=3))
    config = client.meta.config
    assert config.connect_timeout == 3
    assert config.read_timeout == 3
    assert config.retries["total_max_attempts"] == 1


@pytest.mark.anyio
async def test_resolve_prefers_secret_name_over_inline(ssm):
    client, stubber = ssm
    _stub_param(stubber, value='{"source": "ssm"}')
    s = Settings(secret_name=PARAM_NAME, secret_json='{"source": "inline"}')
    assert await resolve_startup_params(s, client) == {"source": "ssm"}


@pytest.mark.anyio
@pytest.mark.parametrize(
    "raw, expected",
    [
        ('{"a": {"b": [1, 2.5, null]}}', {"a": {"b": [1, 2.5, None]}}),
        ("[1, 2, 3]", [1, 2, 3]),
        ('"plain"', "plain"),
        ("null", None),
    ],
)
async def test_resolve_inline_json(raw, expected):
    assert await resolve_startup_params(Settings(secret_json=raw)) == expected


@pytest.mark.anyio
async def test_resolve_invalid_inline_json():
    with pytest.raises(ConfigParseError, match="^Invalid inline JSON -- "):
        await resolve_startup_params(Settings(secret_json="{'single': 'quotes'}"))


@pytest.mark.anyio
async def test_resolve_defaults_to_empty_object():
    assert await resolve_startup_params(Settings()) == {}


@pytest.mark.anyio
async def test_resolve_reports_missing_region_as_fetch_error(monkeypatch, tmp_path):
    for name in ("AWS_REGION", "AWS_DEFAULT_REGION", "AWS_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "missing-config"))
    with pytest.raises(ConfigFetchError, match="Could not create SSM client"):
        await resolve_startup_params(Settings(secret_name=PARAM_NAME))
