from typing import Any, Dict, Iterable, List, Optional
from dataclasses import dataclass, field, fields
from enum import IntEnum


class RefundReason(IntEnum):
    """Reason codes accepted by order/refund."""
    OTHER = -1
    STORE_UNABLE_TO_FULFILL = 0
    OUT_OF_STOCK = 1
    UNABLE_TO_SHIP_TO_ADDRESS = 2
    CUSTOMER_PROVIDED_WRONG_ADDRESS = 3
    CUSTOMER_CANCELLED = 4
    ITEM_MARKED_DELIVERED_NOT_RECEIVED = 5
    ITEM_NOT_AS_DESCRIBED = 6


class ParamsMixin:
    # fields the API sends and expects as "|" separated strings
    pipe_joined: tuple = ()

    def to_params(self, names: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Build request parameters from the named fields, skipping unset ones."""
        if names is None:
            names = [f.name for f in fields(self)]
        params = {}
        for name in names:
            value = getattr(self, name)
            if value is None or value == []:
                continue
            if name in self.pipe_joined:
                value = "|".join(value)
            params[name] = value
        return params


@dataclass
class WishProductVariation(ParamsMixin):
    """Модель варианта товара."""
    sku: str
    product_id: Optional[str] = None
    id: Optional[str] = None
    inventory: Optional[int] = None
    price: Optional[float] = None
    shipping: Optional[float] = None
    enabled: Optional[bool] = None
    size: Optional[str] = None
    color: Optional[str] = None
    msrp: Optional[float] = None
    shipping_time: Optional[str] = None
    main_image: Optional[str] = None


@dataclass
class WishProduct(ParamsMixin):
    """Модель товара."""
    pipe_joined = ("extra_images",)

    id: str
    name: str = ""
    description: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    brand: Optional[str] = None
    landing_page_url: Optional[str] = None
    upc: Optional[str] = None
    main_image: Optional[str] = None
    extra_images: List[str] = field(default_factory=list)
    parent_sku: Optional[str] = None
    review_status: Optional[str] = None
    number_saves: int = 0
    number_sold: int = 0
    date_uploaded: Optional[str] = None
    last_updated: Optional[str] = None
    variants: List[WishProductVariation] = field(default_factory=list)


@dataclass
class WishAddress(ParamsMixin):
    """Модель адреса доставки."""
    name: Optional[str] = None
    street_address1: Optional[str] = None
    street_address2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zipcode: Optional[str] = None
    country: Optional[str] = None
    phone_number: Optional[str] = None


@dataclass
class WishTracker(ParamsMixin):
    """Данные отслеживания отправления."""
    tracking_provider: str
    tracking_number: Optional[str] = None
    ship_note: Optional[str] = None


@dataclass
class WishOrder:
    """Модель заказа."""
    order_id: str
    state: str = ""
    sku: str = ""
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    product_name: str = ""
    quantity: int = 0
    price: float = 0.0
    cost: float = 0.0
    shipping: float = 0.0
    shipping_cost: float = 0.0
    order_total: float = 0.0
    order_time: Optional[str] = None
    last_updated: Optional[str] = None
    days_to_fulfill: Optional[int] = None
    tracking_number: Optional[str] = None
    shipping_provider: Optional[str] = None
    shipping_detail: Optional[WishAddress] = None


@dataclass
class WishTicket:
    """Модель обращения покупателя."""
    id: str
    transaction_id: Optional[str] = None
    merchant_id: Optional[str] = None
    state: str = ""
    subject: str = ""
    label: Optional[str] = None
    sublabel: Optional[str] = None
    open_date: Optional[str] = None
    last_update_date: Optional[str] = None
    replies: List[Dict[str, Any]] = field(default_factory=list)
    items: List[WishOrder] = field(default_factory=list)
