# wish_merchant/api/parsers.py
from typing import Any, Dict, List, Optional
from wish_merchant.api.exceptions import ConversionError
from wish_merchant.api.models import (
    WishAddress, WishOrder, WishProduct, WishProductVariation, WishTicket,
)

class RecordParser:
    """Base class for turning raw API records into models.

    Records usually arrive wrapped in their type name, e.g. {"Product": {...}};
    the wrapper is removed when present.
    """
    model_name = ""

    def parse(self, record: Any):
        if not isinstance(record, dict):
            raise ConversionError(self.model_name, record, "record is not an object")
        data = record.get(self.model_name, record)
        try:
            return self.build(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ConversionError(self.model_name, record, f"{type(e).__name__}: {e}") from e

    def build(self, data: Dict[str, Any]):
        raise NotImplementedError("Subclasses must implement build method")

def _float(value: Any, default: float = 0.0) -> float:
    return float(value) if value not in (None, "") else default

def _int(value: Any, default: Optional[int] = 0) -> Optional[int]:
    return int(value) if value not in (None, "") else default

def _bool(value: Any) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.lower() == "true"
    return bool(value)

def _split(value: Any, sep: str) -> List[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [v for v in value.split(sep) if v]
    return list(value)

class VariationParser(RecordParser):
    """Parser for product variations."""
    model_name = "Variant"

    def build(self, data: Dict[str, Any]) -> WishProductVariation:
        # all_images is "|" separated with the main image first
        images = _split(data.get("all_images"), "|")
        return WishProductVariation(
            sku=data["sku"], product_id=data.get("product_id"), id=data.get("id"),
            inventory=_int(data.get("inventory"), None), price=_float(data.get("price"), None),
            shipping=_float(data.get("shipping"), None), enabled=_bool(data.get("enabled")),
            size=data.get("size"), color=data.get("color"), msrp=_float(data.get("msrp"), None),
            shipping_time=data.get("shipping_time"), main_image=data.get("main_image") or (images[0] if images else None)
        )

class ProductParser(RecordParser):
    """Parser for products, including their variations."""
    model_name = "Product"

    def __init__(self, variation_parser: Optional[VariationParser] = None):
        self.variation_parser = variation_parser or VariationParser()

    def build(self, data: Dict[str, Any]) -> WishProduct:
        tags = [tag.get("Tag", tag).get("name", "") if isinstance(tag, dict) else str(tag)
                for tag in _split(data.get("tags"), ",")]
        return WishProduct(
            id=str(data["id"]), name=data.get("name", ""), description=data.get("description"),
            tags=tags, brand=data.get("brand"), landing_page_url=data.get("landing_page_url"),
            upc=data.get("upc"), main_image=data.get("main_image"),
            extra_images=_split(data.get("extra_images"), "|"), parent_sku=data.get("parent_sku"),
            review_status=data.get("review_status"), number_saves=_int(data.get("number_saves")),
            number_sold=_int(data.get("number_sold")), date_uploaded=data.get("date_uploaded"),
            last_updated=data.get("last_updated"),
            variants=[self.variation_parser.parse(v) for v in data.get("variants") or []]
        )

class AddressParser(RecordParser):
    """Parser for shipping details."""
    model_name = "ShippingDetail"

    def build(self, data: Dict[str, Any]) -> WishAddress:
        return WishAddress(**{k: data[k] for k in WishAddress.__annotations__ if data.get(k) is not None})

class OrderParser(RecordParser):
    """Parser for orders."""
    model_name = "Order"

    def __init__(self, address_parser: Optional[AddressParser] = None):
        self.address_parser = address_parser or AddressParser()

    def build(self, data: Dict[str, Any]) -> WishOrder:
        detail = data.get("ShippingDetail")
        return WishOrder(
            order_id=str(data["order_id"]), state=data.get("state", ""), sku=data.get("sku", ""),
            product_id=data.get("product_id"), variant_id=data.get("variant_id"),
            product_name=data.get("product_name", ""), quantity=_int(data.get("quantity")),
            price=_float(data.get("price")), cost=_float(data.get("cost")),
            shipping=_float(data.get("shipping")), shipping_cost=_float(data.get("shipping_cost")),
            order_total=_float(data.get("order_total")), order_time=data.get("order_time"),
            last_updated=data.get("last_updated"), days_to_fulfill=_int(data.get("days_to_fulfill"), None),
            tracking_number=data.get("tracking_number"), shipping_provider=data.get("shipping_provider"),
            shipping_detail=self.address_parser.parse(detail) if detail else None
        )

class TicketParser(RecordParser):
    """Parser for customer tickets."""
    model_name = "Ticket"

    def __init__(self, order_parser: Optional[OrderParser] = None):
        self.order_parser = order_parser or OrderParser()

    def build(self, data: Dict[str, Any]) -> WishTicket:
        return WishTicket(
            id=str(data["id"]), transaction_id=data.get("transaction_id"), merchant_id=data.get("merchant_id"),
            state=data.get("state", ""), subject=data.get("subject", ""), label=data.get("label"),
            sublabel=data.get("sublabel"), open_date=data.get("open_date"),
            last_update_date=data.get("last_update_date"),
            replies=[r.get("Reply", r) for r in data.get("replies") or []],
            items=[self.order_parser.parse(i) for i in data.get("items") or []]
        )
