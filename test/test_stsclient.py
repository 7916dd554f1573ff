import json
import os
import shutil
import tempfile
import time
import unittest

import requests

from urllib.parse import parse_qsl, unquote, urlsplit

from mock import Mock, patch
from cos.modules.client.stsclient import StsClient
from cos.modules.client.stssigner import StsSigner
from cos.modules.clientinfo import CLIENT_NAME, CLIENT_VERSION
from cos.modules.coscredentials import COSCredentials
from cos.modules.errors import ConfigError, ErrorKind, ResponseParseError, ServerError, TransportError
from cos.modules.policy import Policy
from helpers.fake_http_server import FakeServer


class StsClientTest(unittest.TestCase):

    FAKE_SERVER = None
    USER_AGENT = CLIENT_NAME + "/" + str(CLIENT_VERSION)
    BUCKET = "examplebucket-1250000000"
    JSON_RESPONSE = json.dumps({
        "Response": {
            "Credentials": {
                "Token": "tmp_token",
                "TmpSecretId": "tmp_secret_id",
                "TmpSecretKey": "tmp_secret_key",
            },
            "ExpiredTime": 1700001800,
            "Expiration": "2023-11-14T22:43:20Z",
            "RequestId": "6e7b2d6c-3d4f-4c6a-8f6a-2f8a3d2b1c0e",
        }
    })
    LEGACY_JSON_RESPONSE = json.dumps({
        "code": 0,
        "message": "",
        "codeDesc": "Success",
        "data": {
            "credentials": {
                "sessionToken": "legacy_token",
                "tmpSecretId": "legacy_secret_id",
                "tmpSecretKey": "legacy_secret_key",
            },
            "expiredTime": 1700001800,
        }
    })

    @classmethod
    def setUpClass(cls):
        cls.FAKE_SERVER = FakeServer()
        cls.FAKE_SERVER.start_server()
        cls.FAKE_SERVER.serve_forever()

    def setUp(self):
        self.server = StsClientTest.FAKE_SERVER
        self.server.set_expected_response(StsClientTest.JSON_RESPONSE, 200)
        self.credentials = COSCredentials("AKIDtest", "secret")
        self.client = StsClient(self.credentials, "ap-guangzhou", self.server.get_url())
        self.logger = Mock()
        self.client._LOGGER = self.logger
        self.policy = Policy.allow_put_object(self.BUCKET, "uploads/")

    @classmethod
    def tearDownClass(cls):
        cls.FAKE_SERVER.stop_server()
        cls.FAKE_SERVER = None

    def test_constructor(self):
        client = StsClient(self.credentials, "ap-guangzhou", self.server.get_url(), connection_timeout=10,
                           response_timeout=20)
        self.assertEqual(self.server.get_url(), client.endpoint)
        self.assertEqual((10, 20), client.timeout)
        self.assertEqual(self.server.get_host(), client.federation_token_req_builder.host)

    def test_default_endpoint(self):
        client = StsClient(self.credentials, "ap-guangzhou")
        self.assertEqual("https://sts.tencentcloudapi.com/", client.endpoint)
        self.assertEqual("sts.tencentcloudapi.com", client.federation_token_req_builder.host)

    def test_empty_credentials_or_region_are_rejected(self):
        for credentials, region in [(COSCredentials("", "secret"), "ap-guangzhou"),
                                    (COSCredentials("AKIDtest", ""), "ap-guangzhou"),
                                    (COSCredentials("AKIDtest", "secret"), ""),
                                    (None, "ap-guangzhou")]:
            with self.assertRaises(ConfigError):
                StsClient(credentials, region, self.server.get_url())

    def test_invalid_endpoint(self):
        with self.assertRaises(StsClient.InvalidEndpointException):
            self.client._validate_and_set_endpoint("invalid_endpoint")
        self.assertTrue(self.logger.error.called)

    def test_get_user_agent_header(self):
        self.assertEqual(self.USER_AGENT, self.client._get_custom_headers()["User-Agent"])

    def test_get_request(self):
        self.server.set_expected_response("OK", 200)
        result = self.client._run_request("Testing_Request")
        self.assertEqual("OK", result.text)
        self.assertEqual(200, result.status_code)
        self.assertEqual("/?Testing_Request", self.server.get_received_request()["path"])

    def test_get_credentials(self):
        credentials = self.client.get_credentials(self.policy)
        self.assertEqual("tmp_secret_id", credentials.secret_id)
        self.assertEqual("tmp_secret_key", credentials.secret_key)
        self.assertEqual("tmp_token", credentials.token)
        self.assertEqual(1700001800, credentials.expire_at)
        self.assertEqual("2023-11-14T22:43:20Z", credentials.expiration)

    def test_get_credentials_from_legacy_response(self):
        self.server.set_expected_response(self.LEGACY_JSON_RESPONSE, 200)
        credentials = self.client.get_credentials(self.policy)
        self.assertEqual("legacy_secret_id", credentials.secret_id)
        self.assertEqual("legacy_secret_key", credentials.secret_key)
        self.assertEqual("legacy_token", credentials.token)
        self.assertEqual(1700001800, credentials.expire_at)

    def test_request_parameters(self):
        self.client.get_credentials(self.policy, 3600, "uploader")
        params = self.get_received_params()
        self.assertEqual("GetFederationToken", params["Action"])
        self.assertEqual("2018-08-13", params["Version"])
        self.assertEqual("ap-guangzhou", params["Region"])
        self.assertEqual("AKIDtest", params["SecretId"])
        self.assertEqual("uploader", params["Name"])
        self.assertEqual("3600", params["DurationSeconds"])
        self.assertTrue(abs(int(params["Timestamp"]) - time.time()) < 60)
        self.assertTrue(params["Nonce"].isdigit())
        self.assertEqual(self.policy.to_dict(), json.loads(unquote(params["Policy"])))

    def test_default_request_parameters(self):
        self.client.get_credentials(self.policy)
        params = self.get_received_params()
        self.assertEqual("temp-user", params["Name"])
        self.assertEqual("1800", params["DurationSeconds"])

    def test_policy_document_is_accepted(self):
        self.client.get_credentials(self.policy.to_json())
        self.assertEqual(self.policy.to_dict(), json.loads(unquote(self.get_received_params()["Policy"])))

    def test_request_signature_verifies(self):
        self.client.get_credentials(self.policy)
        params = self.get_received_params()
        signature = params.pop("Signature")
        self.assertEqual(StsSigner(self.credentials, self.server.get_host()).sign(params), signature)

    def test_server_received_user_agent_information(self):
        self.client.get_credentials(self.policy)
        self.assertEqual(self.USER_AGENT, self.server.get_received_request()["headers"]["User-Agent"])

    def test_token_is_sent_with_temporary_credentials(self):
        client = StsClient(COSCredentials("tmp_id", "tmp_key", "tmp_token"), "ap-guangzhou", self.server.get_url())
        client.get_credentials(self.policy)
        self.assertEqual("tmp_token", self.get_received_params()["Token"])

    def test_api_error_raises_server_error(self):
        self.server.set_expected_response(json.dumps({"Response": {
            "Error": {"Code": "InvalidParameter.PolicyTooLong", "Message": "policy too long"},
            "RequestId": "1"}}), 200)
        with self.assertRaises(ServerError) as context:
            self.client.get_credentials(self.policy)
        self.assertEqual(None, context.exception.status)
        self.assertEqual("InvalidParameter.PolicyTooLong", context.exception.code)
        self.assertEqual("policy too long", context.exception.server_message)
        self.assertTrue(self.logger.warning.called)

    def test_legacy_api_error_raises_server_error(self):
        self.server.set_expected_response(json.dumps({"code": 4, "message": "signature error"}), 200)
        with self.assertRaises(ServerError) as context:
            self.client.get_credentials(self.policy)
        self.assertEqual("4", context.exception.code)
        self.assertEqual("signature error", context.exception.server_message)

    def test_client_raise_exception_on_credentials_error(self):
        self.server.set_expected_response("Client Error: Forbidden", 403)
        self.assert_no_retry_on_error_request(403)

    def test_client_raise_exception_on_service_unavailable_error(self):
        self.server.set_expected_response("Service Unavailable", 503)
        self.assert_no_retry_on_error_request(503)

    def test_malformed_response_raises_parse_error(self):
        self.server.set_expected_response("not json", 200)
        self.assertRaises(ResponseParseError, self.client.get_credentials, self.policy)

    def test_unexpected_response_raises_parse_error(self):
        self.server.set_expected_response("[]", 200)
        self.assertRaises(ResponseParseError, self.client.get_credentials, self.policy)

    def test_missing_credentials_raise_parse_error(self):
        self.server.set_expected_response(json.dumps({"Response": {"RequestId": "1"}}), 200)
        self.assertRaises(ResponseParseError, self.client.get_credentials, self.policy)

    def test_incomplete_credentials_raise_parse_error(self):
        self.server.set_expected_response(json.dumps({"Response": {
            "Credentials": {"TmpSecretId": "id", "TmpSecretKey": "key"}}}), 200)
        self.assertRaises(ResponseParseError, self.client.get_credentials, self.policy)

    def test_timeout_raises_transport_error(self):
        self.client.session = Mock()
        self.client.session.get.side_effect = requests.Timeout("read timed out")
        with self.assertRaises(TransportError) as context:
            self.client.get_credentials(self.policy)
        self.assertEqual(ErrorKind.TIMEOUT, context.exception.kind)
        self.assertTrue(self.logger.warning.called)

    def test_connection_error_raises_transport_error(self):
        self.client.session = Mock()
        self.client.session.get.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(TransportError) as context:
            self.client.get_credentials(self.policy)
        self.assertEqual(ErrorKind.CONNECTION, context.exception.kind)

    def test_debug_trace_leaves_out_token_and_signature(self):
        temp_dir = tempfile.mkdtemp()
        try:
            client = StsClient(COSCredentials("tmp_id", "tmp_key", "secret_session_token"), "ap-guangzhou",
                               self.server.get_url(), debug=True)
            with patch("cos.modules.client.stsclient.gettempdir", return_value=temp_dir):
                client.get_credentials(self.policy)
            with open(os.path.join(temp_dir, StsClient._TRACE_FILE_NAME)) as trace_file:
                trace = trace_file.read()
            self.assertTrue(trace.startswith("curl -i -v"))
            self.assertTrue("Action=GetFederationToken" in trace)
            self.assertFalse("secret_session_token" in trace)
            self.assertFalse("Signature=" in trace)
            self.assertEqual("secret_session_token", self.get_received_params()["Token"])
        finally:
            shutil.rmtree(temp_dir)

    def get_received_params(self):
        path = self.server.get_received_request()["path"]
        return dict(parse_qsl(urlsplit(path).query, keep_blank_values=True))

    def assert_no_retry_on_error_request(self, status):
        start = time.time()
        with self.assertRaises(ServerError) as context:
            self.client.get_credentials(self.policy)
        delta = time.time() - start
        self.assertEqual(status, context.exception.status)
        self.assertTrue(delta < self.client._DEFAULT_RESPONSE_TIMEOUT)
        self.assertTrue(self.logger.warning.called)
