# SPDX-License-Identifier: Apache-2.0
# Copyright 2024-2026 CAB Ingénierie / Christophe ABOULICAM
"""Tests for the tool handlers, with mocked clients."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from gupshup_mcp import tools
from gupshup_mcp.clients import GupshupClient, GupshupEnterpriseClient
from gupshup_mcp.models import (
    Channel,
    CompareTemplatesParams,
    CreateTemplateParams,
    CredentialStatus,
    DeleteTemplateParams,
    EditTemplateParams,
    EnableAnalyticsParams,
    GatewayRawRequestParams,
    GatewayResponse,
    GetAnalyticsParams,
    SendTemplateParams,
    SmsSendTextParams,
    UploadMediaParams,
    UsageSummaryParams,
    WhatsappOptInParams,
    WhatsappSendTemplateParams,
    WhatsappSendTextParams,
)


@pytest.fixture
def partner() -> MagicMock:
    client = MagicMock(spec=GupshupClient)
    client.app_request = AsyncMock(return_value={})
    client.partner_request = AsyncMock(return_value={})
    return client


@pytest.fixture
def enterprise() -> MagicMock:
    return MagicMock(spec=GupshupEnterpriseClient)


# =============================================================================
# Enterprise gateway tools
# =============================================================================


class TestGatewayTools:
    """Enterprise handlers render gateway results as JSON."""

    @pytest.mark.asyncio
    async def test_check_gateway_credentials(self, enterprise):
        enterprise.check_credentials.return_value = CredentialStatus(sms=True, whatsapp=False)

        result = await tools.check_gateway_credentials(enterprise)

        assert json.loads(result.text) == {"sms": True, "whatsapp": False}

    @pytest.mark.asyncio
    async def test_pipe_response_rendered(self, enterprise):
        enterprise.whatsapp_opt_in = AsyncMock(return_value=GatewayResponse.parse("success | 91 | done"))

        result = await tools.whatsapp_opt_in(enterprise, WhatsappOptInParams(phone_number="919876543210"))

        enterprise.whatsapp_opt_in.assert_awaited_once_with("919876543210")
        assert json.loads(result.text) == {
            "raw": "success | 91 | done",
            "status": "success",
            "code": "91",
            "message": "done",
        }

    @pytest.mark.asyncio
    async def test_json_response_passed_through(self, enterprise):
        enterprise.sms_send_text = AsyncMock(return_value={"response": {"status": "success"}})

        result = await tools.sms_send_text(
            enterprise,
            SmsSendTextParams(send_to="919876543210", message="hi", dlt_template_id="D1"),
        )

        assert json.loads(result.text) == {"response": {"status": "success"}}
        enterprise.sms_send_text.assert_awaited_once_with(
            send_to="919876543210",
            message="hi",
            principal_entity_id=None,
            dlt_template_id="D1",
            msg_type="TEXT",
            format="JSON",
        )

    @pytest.mark.asyncio
    async def test_whatsapp_send_template(self, enterprise):
        enterprise.whatsapp_send_template = AsyncMock(return_value={})

        await tools.whatsapp_send_template(
            enterprise,
            WhatsappSendTemplateParams(send_to="91", template_id="T1", variables={"var1": "A"}),
        )

        enterprise.whatsapp_send_template.assert_awaited_once_with(
            send_to="91",
            template_id="T1",
            variables={"var1": "A"},
            msg_type="TEXT",
            format="Text",
            data_encoding="TEXT",
        )

    @pytest.mark.asyncio
    async def test_whatsapp_send_text(self, enterprise):
        enterprise.whatsapp_send_text = AsyncMock(return_value={})

        await tools.whatsapp_send_text(enterprise, WhatsappSendTextParams(send_to="91", message="Hello"))

        enterprise.whatsapp_send_text.assert_awaited_once_with(
            send_to="91", message="Hello", msg_type="TEXT", format="text"
        )

    @pytest.mark.asyncio
    async def test_gateway_raw_request(self, enterprise):
        enterprise.gateway_request = AsyncMock(return_value={"ok": True})

        params = GatewayRawRequestParams(endpoint="whatsapp", request_params={"method": "OPT_IN"})
        result = await tools.gateway_raw_request(enterprise, params)

        enterprise.gateway_request.assert_awaited_once_with(Channel.WHATSAPP, "POST", {"method": "OPT_IN"})
        assert json.loads(result.text) == {"ok": True}

    def test_raw_request_rejects_unknown_endpoint(self):
        with pytest.raises(ValueError):
            GatewayRawRequestParams(endpoint="email")


# =============================================================================
# Partner API tools
# =============================================================================


class TestMessagingTools:
    """send_template_message."""

    @pytest.mark.asyncio
    async def test_send_template_message(self, partner):
        partner.app_request.return_value = {"status": "submitted", "messageId": "m-1"}
        params = SendTemplateParams(
            source="917834811114",
            destination="919876543210",
            src_name="DemoApp",
            template={"id": "tpl-1", "params": ["Rahul"]},
            message={"type": "image", "image": {"link": "https://x/img.png"}},
        )

        result = await tools.send_template_message(partner, params)

        method, path, app_id, body = partner.app_request.await_args.args
        assert (method, path, app_id) == ("POST", "/partner/app/{appId}/template/msg", None)
        assert body["src.name"] == "DemoApp"
        assert body["template"] == {"id": "tpl-1", "params": ["Rahul"]}
        assert body["message"] == {"type": "image", "image": {"link": "https://x/img.png"}}
        assert result.text == "Message sent to 919876543210.\nStatus: submitted\nMessage ID: m-1"


class TestTemplateTools:
    """Template management handlers."""

    @pytest.mark.asyncio
    async def test_list_templates_summarizes(self, partner):
        partner.app_request.return_value = {
            "templates": [
                {
                    "id": "t1",
                    "elementName": "order_update",
                    "templateType": "TEXT",
                    "category": "UTILITY",
                    "status": "APPROVED",
                    "languageCode": "en",
                    "quality": "GREEN",
                    "containerMeta": "{...}",
                }
            ]
        }

        result = await tools.list_templates(partner, "app-1")

        partner.app_request.assert_awaited_once_with("GET", "/partner/app/{appId}/templates", "app-1")
        assert json.loads(result.text) == [
            {
                "id": "t1",
                "name": "order_update",
                "type": "TEXT",
                "category": "UTILITY",
                "status": "APPROVED",
                "language": "en",
                "quality": "GREEN",
                "reason": None,
            }
        ]

    @pytest.mark.asyncio
    async def test_list_templates_empty(self, partner):
        result = await tools.list_templates(partner)
        assert json.loads(result.text) == []

    @pytest.mark.asyncio
    async def test_create_template_enables_sample(self, partner):
        params = CreateTemplateParams(
            element_name="order_update",
            language_code="en_US",
            category="UTILITY",
            template_type="TEXT",
            content="Hi {{1}}",
            example="Hi Rahul",
            buttons=[{"type": "PHONE_NUMBER", "text": "Call", "phone_number": "+9112345"}],
        )

        result = await tools.create_template(partner, params)

        _, path, _, body = partner.app_request.await_args.args
        assert path == "/partner/app/{appId}/templates"
        assert body["enableSample"] is True
        assert body["category"] == "UTILITY"
        assert body["buttons"] == [{"type": "PHONE_NUMBER", "text": "Call", "phoneNumber": "+9112345"}]
        assert body["header"] is None
        assert 'Template "order_update" submitted for approval.' in result.text

    @pytest.mark.asyncio
    async def test_edit_template_path(self, partner):
        await tools.edit_template(partner, EditTemplateParams(template_id="t9", content="New"))

        method, path, _, body = partner.app_request.await_args.args
        assert method == "PUT"
        assert path == "/partner/app/{appId}/templates/t9"
        assert body["content"] == "New"
        assert body["category"] is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "template_id,expected",
        [
            (None, "/partner/app/{appId}/template/order_update"),
            ("t9", "/partner/app/{appId}/template/order_update/t9"),
        ],
    )
    async def test_delete_template_path(self, partner, template_id, expected):
        await tools.delete_template(
            partner, DeleteTemplateParams(element_name="order_update", template_id=template_id)
        )
        partner.app_request.assert_awaited_once_with("DELETE", expected, None)

    @pytest.mark.asyncio
    async def test_upload_media(self, partner):
        partner.app_request.return_value = {"handleId": {"message": "4::aW1"}}

        result = await tools.upload_media(
            partner, UploadMediaParams(file="https://x/img.png", file_type="image/png")
        )

        partner.app_request.assert_awaited_once_with(
            "POST",
            "/partner/app/{appId}/upload/media",
            None,
            {"file": "https://x/img.png", "fileType": "image/png"},
        )
        assert "handleId" in result.text


class TestAnalyticsTools:
    """Analytics and health handlers."""

    @pytest.mark.asyncio
    async def test_enable_template_analytics(self, partner):
        result = await tools.enable_template_analytics(partner, EnableAnalyticsParams(enable=False))

        partner.app_request.assert_awaited_once_with(
            "POST", "/partner/app/{appId}/template/analytics", None, {"enable": False}
        )
        assert result.text.startswith("Template analytics disabled.")

    @pytest.mark.asyncio
    async def test_get_template_analytics_query(self, partner):
        partner.app_request.return_value = {"template_analytics": [{"template_id": "t1", "sent": 3}]}
        params = GetAnalyticsParams(
            start=1700000000,
            end=1700086400,
            template_ids=["t1", "t2"],
            granularity="DAILY",
            metric_types=["SENT", "READ"],
        )

        result = await tools.get_template_analytics(partner, params)

        _, path, _ = partner.app_request.await_args.args
        assert path == (
            "/partner/app/{appId}/template/analytics?start=1700000000&end=1700086400"
            "&template_ids=t1%2Ct2&limit=30&granularity=DAILY&metric_types=SENT%2CREAD"
        )
        assert json.loads(result.text) == [{"template_id": "t1", "sent": 3}]

    def test_get_template_analytics_requires_ids(self):
        with pytest.raises(ValueError):
            GetAnalyticsParams(start=1, end=2, template_ids=[])

    @pytest.mark.asyncio
    async def test_compare_templates_query(self, partner):
        params = CompareTemplatesParams(template_id="t1", template_list=["t2", "t3"], start=1, end=2)

        await tools.compare_templates(partner, params)

        _, path, _ = partner.app_request.await_args.args
        assert path == "/partner/app/{appId}/template/analytics/t1/compare?templateList=t2%2Ct3&start=1&end=2"

    @pytest.mark.asyncio
    async def test_get_app_health_combines_calls(self, partner):
        responses = {
            "/partner/app/{appId}/health": {"healthy": "true"},
            "/partner/app/{appId}/ratings": {"currentLimit": "TIER_1K"},
            "/partner/app/{appId}/wallet/balance": {"walletResponse": {"currentBalance": 12.5}},
        }
        partner.app_request.side_effect = lambda method, path, app_id: responses[path]

        result = await tools.get_app_health(partner, "app-1")

        assert json.loads(result.text) == {
            "health": {"healthy": "true"},
            "ratings": {"currentLimit": "TIER_1K"},
            "wallet": {"walletResponse": {"currentBalance": 12.5}},
        }
        assert partner.app_request.await_count == 3


class TestUtilityTools:
    """Account-level handlers."""

    def test_mask_token(self):
        assert tools.mask_token("sk_1234567890abcd") == "sk_" + "*" * 10 + "abcd"
        assert tools.mask_token("short") == "****"
        assert tools.mask_token("12345678") == "****"

    @pytest.mark.asyncio
    async def test_list_apps(self, partner):
        partner.partner_request.return_value = {"partnerApps": [{"id": "a1", "name": "Demo"}]}

        result = await tools.list_apps(partner)

        partner.partner_request.assert_awaited_once_with("GET", "/partner/account/api/partnerApps")
        assert json.loads(result.text) == [{"id": "a1", "name": "Demo"}]

    @pytest.mark.asyncio
    async def test_get_usage_summary(self, partner):
        await tools.get_usage_summary(partner, UsageSummaryParams(from_date="2024-01-01", to_date="2024-01-31"))

        partner.app_request.assert_awaited_once_with(
            "GET", "/partner/app/{appId}/usage?from=2024-01-01&to=2024-01-31", None
        )

    @pytest.mark.asyncio
    async def test_get_app_token_masks(self, partner):
        partner.resolve_app_id.return_value = "app-1"
        partner.token_manager = MagicMock()
        partner.token_manager.get_app_token = AsyncMock(return_value="sk_1234567890abcd")

        result = await tools.get_app_token(partner)

        partner.token_manager.get_app_token.assert_awaited_once_with("app-1")
        assert "sk_1234567890abcd" not in result.text
        assert result.text.startswith("App token for app-1: sk_**********abcd")
