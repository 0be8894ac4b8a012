"""
Tests for PaymentsTools delegation to the API client.
"""

import pytest

from ghl_mcp.base import ExecutionError, ToolInputError
from ghl_mcp.tools.payments import PaymentsTools


@pytest.fixture
def payments_tools(mock_client):
    mock_client.list_orders.return_value = {"data": []}
    mock_client.create_coupon.return_value = {"data": {"id": "coupon_123"}}
    return PaymentsTools(mock_client)


class TestPaymentsTools:

    @pytest.mark.asyncio
    async def test_delegates_list_orders_to_the_api_client(self, payments_tools, mock_client):
        args = {"altId": "loc_123", "altType": "location"}

        result = await payments_tools.execute("list_orders", args)

        mock_client.list_orders.assert_awaited_once_with(args)
        assert result == {"data": []}

    @pytest.mark.asyncio
    async def test_delegates_create_coupon_to_the_api_client(self, payments_tools, mock_client):
        args = {"code": "SAVE10", "discountType": "percentage", "discountValue": 10}

        result = await payments_tools.execute("create_coupon", args)

        mock_client.create_coupon.assert_awaited_once_with(args)
        assert result == {"data": {"id": "coupon_123"}}

    @pytest.mark.asyncio
    async def test_get_order_by_id_splits_path_argument(self, payments_tools, mock_client):
        await payments_tools.execute("get_order_by_id", {"orderId": "ord_1", "altId": "loc_9"})

        mock_client.get_order_by_id.assert_awaited_once_with("ord_1", {"altId": "loc_9"})

    @pytest.mark.asyncio
    async def test_rejects_invalid_coupon(self, payments_tools, mock_client):
        with pytest.raises(ToolInputError):
            await payments_tools.execute(
                "create_coupon", {"code": "X", "discountType": "bogus", "discountValue": 5}
            )

        mock_client.create_coupon.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_throws_an_error_for_unknown_tools(self, payments_tools):
        with pytest.raises(ExecutionError, match="Unknown Payments tool: unknown_tool"):
            await payments_tools.execute("unknown_tool", {})
