"""
Payments Tools

Orders, transactions and coupons. Argument mappings are forwarded to the
API client as given; altId/altType default to the configured location.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from ..base import ToolArgs, ToolProvider, tool


class AltArgs(ToolArgs):
    altId: Optional[str] = Field(None, description="Location ID (defaults to the configured location)")
    altType: Optional[Literal["location"]] = Field(None, description="Alt type, always 'location'")


class ListOrdersArgs(AltArgs):
    status: Optional[str] = Field(None, description="Order status filter")
    paymentMode: Optional[Literal["live", "test"]] = Field(None, description="Payment mode")
    startAt: Optional[str] = Field(None, description="Start date (YYYY-MM-DD)")
    endAt: Optional[str] = Field(None, description="End date (YYYY-MM-DD)")
    search: Optional[str] = Field(None, description="Search term")
    contactId: Optional[str] = Field(None, description="Only orders of this contact")
    funnelProductIds: Optional[str] = Field(None, description="Comma-separated funnel product IDs")
    limit: Optional[int] = Field(None, ge=1, description="Maximum number of orders")
    offset: Optional[int] = Field(None, ge=0, description="Number of orders to skip")


class OrderIdArgs(AltArgs):
    orderId: str = Field(description="The unique ID of the order")


class ListTransactionsArgs(AltArgs):
    paymentMode: Optional[Literal["live", "test"]] = Field(None, description="Payment mode")
    startAt: Optional[str] = Field(None, description="Start date (YYYY-MM-DD)")
    endAt: Optional[str] = Field(None, description="End date (YYYY-MM-DD)")
    entitySourceType: Optional[str] = Field(None, description="Source type of the transaction")
    search: Optional[str] = Field(None, description="Search term")
    contactId: Optional[str] = Field(None, description="Only transactions of this contact")
    limit: Optional[int] = Field(None, ge=1, description="Maximum number of transactions")
    offset: Optional[int] = Field(None, ge=0, description="Number of transactions to skip")


class CreateCouponArgs(AltArgs):
    name: Optional[str] = Field(None, description="Display name of the coupon")
    code: str = Field(min_length=1, description="Code customers enter at checkout")
    discountType: Literal["percentage", "amount"] = Field(description="Percentage or fixed amount")
    discountValue: float = Field(gt=0, description="Discount value")
    startDate: Optional[str] = Field(None, description="Start date in ISO 8601 format")
    endDate: Optional[str] = Field(None, description="End date in ISO 8601 format")
    usageLimit: Optional[int] = Field(None, ge=1, description="Maximum number of redemptions")
    productIds: Optional[List[str]] = Field(None, description="Restrict the coupon to these products")


class ListCouponsArgs(AltArgs):
    limit: Optional[int] = Field(None, ge=1, description="Maximum number of coupons")
    offset: Optional[int] = Field(None, ge=0, description="Number of coupons to skip")
    status: Optional[Literal["scheduled", "active", "expired"]] = Field(None, description="Coupon status")
    search: Optional[str] = Field(None, description="Search by name or code")


class CouponIdArgs(AltArgs):
    id: str = Field(description="The unique ID of the coupon")


class PaymentsTools(ToolProvider):
    category = "Payments"

    @tool("list_orders", "List payment orders with optional filtering and pagination.", args=ListOrdersArgs)
    async def list_orders(self, params: ListOrdersArgs) -> Dict[str, Any]:
        return await self.client.list_orders(params.payload())

    @tool("get_order_by_id", "Get a payment order by ID.", args=OrderIdArgs)
    async def get_order_by_id(self, params: OrderIdArgs) -> Dict[str, Any]:
        args = params.payload()
        return await self.client.get_order_by_id(args.pop("orderId"), args)

    @tool("list_transactions", "List payment transactions with optional filtering.", args=ListTransactionsArgs)
    async def list_transactions(self, params: ListTransactionsArgs) -> Dict[str, Any]:
        return await self.client.list_transactions(params.payload())

    @tool("create_coupon", "Create a promotional coupon.", args=CreateCouponArgs)
    async def create_coupon(self, params: CreateCouponArgs) -> Dict[str, Any]:
        return await self.client.create_coupon(params.payload())

    @tool("list_coupons", "List coupons with optional filtering.", args=ListCouponsArgs)
    async def list_coupons(self, params: ListCouponsArgs) -> Dict[str, Any]:
        return await self.client.list_coupons(params.payload())

    @tool("delete_coupon", "Delete a coupon.", args=CouponIdArgs)
    async def delete_coupon(self, params: CouponIdArgs) -> Dict[str, Any]:
        args = params.payload()
        return await self.client.delete_coupon(args.pop("id"), args)
