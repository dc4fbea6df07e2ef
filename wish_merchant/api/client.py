# wish_merchant/api/client.py
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar, Union
from prometheus_client import Counter
from wish_merchant.api.base_client import Transport
from wish_merchant.api.exceptions import WishResponseError
from wish_merchant.api.models import (
    RefundReason, WishAddress, WishOrder, WishProduct, WishProductVariation, WishTicket, WishTracker,
)
from wish_merchant.api.pagination import PAGE_SIZE, fetch_all
from wish_merchant.api.parsers import OrderParser, ProductParser, TicketParser, VariationParser
from wish_merchant.api.response import WishResponse, classify_response
from wish_merchant.api.session import DEFAULT_TIMEOUT, WishSession
from wish_merchant.utils.logging import logger

# Prometheus metrics
API_REQUESTS_TOTAL = Counter('wish_api_requests_total', 'Total number of Wish API requests', ['method'])
API_ERRORS_TOTAL = Counter('wish_api_errors_total', 'Total number of Wish API error responses', ['code'])

T = TypeVar("T")

PRODUCT_UPDATE_FIELDS = (
    'id', 'name', 'description', 'tags', 'brand', 'landing_page_url', 'upc', 'main_image', 'extra_images',
)
VARIATION_UPDATE_FIELDS = (
    'sku', 'inventory', 'price', 'enabled', 'size', 'color', 'msrp', 'shipping_time', 'main_image',
)

class WishClient:
    """Client for the Wish merchant API.

    Single-item endpoints go through ``get_response``; list endpoints go through
    ``get_response_iter``, which pages through the results with an explicit
    record parser.
    """

    def __init__(self, access_token: Optional[str] = None, session_type: str = "prod",
                 merchant_id: Optional[str] = None, transport: Optional[Transport] = None,
                 timeout: float = DEFAULT_TIMEOUT, max_attempts: int = 3):
        """Initialize the API client.

        Args:
            access_token (Optional[str]): Merchant access token; unused when a transport is given.
            session_type (str): "prod" or "sandbox".
            merchant_id (Optional[str]): Merchant to act for.
            transport (Optional[Transport]): Prebuilt transport, replaces the default WishSession.
            timeout (float): Request timeout for the default session.
            max_attempts (int): Connection attempts for the default session.
        """
        if transport is None:
            if not access_token:
                raise ValueError("access_token is required when no transport is given")
            transport = WishSession(access_token, session_type, merchant_id,
                                    timeout=timeout, max_attempts=max_attempts)
        self.transport = transport
        self.session_type = getattr(transport, "session_type", session_type)
        self.product_parser = ProductParser()
        self.variation_parser = VariationParser()
        self.order_parser = OrderParser()
        self.ticket_parser = TicketParser(self.order_parser)

    @classmethod
    def from_settings(cls, settings) -> "WishClient":
        """Build a client from a validated Settings object."""
        settings.validate()
        return cls(settings.WISH_ACCESS_TOKEN, settings.WISH_SESSION_TYPE, settings.WISH_MERCHANT_ID,
                   timeout=settings.WISH_TIMEOUT, max_attempts=settings.WISH_MAX_ATTEMPTS)

    def _execute(self, method: str, path: str, params: Dict[str, Any]) -> WishResponse:
        API_REQUESTS_TOTAL.labels(method=method).inc()
        return self.transport.execute(method, path, params)

    def _record_failure(self, method: str, path: str, error: WishResponseError) -> None:
        API_ERRORS_TOTAL.labels(code=str(error.code)).inc()
        logger.error(f"[{self.session_type}] {method} {path} failed: {error}")

    def get_response(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> WishResponse:
        """Send one request and classify its status code.

        Returns:
            WishResponse: The successful envelope.

        Raises:
            WishResponseError: If the status code is not 0.
        """
        response = self._execute(method, path, dict(params or {}))
        try:
            classify_response(response)
        except WishResponseError as e:
            self._record_failure(method, path, e)
            raise
        return response

    def get_response_iter(self, method: str, path: str, factory: Callable[[Any], T],
                          params: Optional[Dict[str, Any]] = None,
                          should_stop: Optional[Callable[[], bool]] = None) -> List[T]:
        """Fetch every page of a list endpoint.

        Args:
            method (str): HTTP method.
            path (str): Endpoint path.
            factory (Callable): Builds one item from a raw record.
            params (Optional[Dict]): Filters sent with every page.
            should_stop (Optional[Callable]): Checked between pages to abandon the fetch.

        Returns:
            List: Items of all pages in server order.
        """
        base_params = dict(params or {})

        def call(offset: int, limit: int) -> WishResponse:
            page_params = dict(base_params)
            page_params['start'] = offset
            page_params['limit'] = limit
            return self._execute(method, path, page_params)

        try:
            return fetch_all(call, factory, PAGE_SIZE, should_stop, label=f"[{self.session_type}] {path}")
        except WishResponseError as e:
            self._record_failure(method, path, e)
            raise

    def auth_test(self) -> bool:
        self.get_response('GET', 'auth_test')
        return True

    # PRODUCT

    def get_product_by_id(self, id: str) -> WishProduct:
        response = self.get_response('GET', 'product', {'id': id})
        return self.product_parser.parse(response.data)

    def get_product_by_parent_sku(self, parent_sku: str) -> WishProduct:
        response = self.get_response('GET', 'product', {'parent_sku': parent_sku})
        return self.product_parser.parse(response.data)

    def create_product(self, params: Dict[str, Any]) -> WishProduct:
        """Create a product; ``params`` follows the product/add field names."""
        response = self.get_response('POST', 'product/add', params)
        return self.product_parser.parse(response.data)

    def update_product(self, product: WishProduct) -> bool:
        self.get_response('POST', 'product/update', product.to_params(PRODUCT_UPDATE_FIELDS))
        return True

    def enable_product(self, product: WishProduct) -> bool:
        return self.enable_product_by_id(product.id)

    def enable_product_by_id(self, id: str) -> bool:
        self.get_response('POST', 'product/enable', {'id': id})
        return True

    def disable_product(self, product: WishProduct) -> bool:
        return self.disable_product_by_id(product.id)

    def disable_product_by_id(self, id: str) -> bool:
        self.get_response('POST', 'product/disable', {'id': id})
        return True

    def get_all_products(self, should_stop: Optional[Callable[[], bool]] = None) -> List[WishProduct]:
        return self.get_response_iter('GET', 'product/multi-get', self.product_parser.parse,
                                      should_stop=should_stop)

    def remove_extra_images(self, product: WishProduct) -> bool:
        return self.remove_extra_images_by_id(product.id)

    def remove_extra_images_by_id(self, id: str) -> bool:
        self.get_response('POST', 'product/remove-extra-images', {'id': id})
        return True

    def update_shipping_by_id(self, id: str, country: str, price: float,
                              wish_express: Optional[bool] = None) -> bool:
        params = {'id': id, 'country': country, 'price': price}
        if wish_express is not None:
            params['wish_express'] = bool(wish_express)
        self.get_response('POST', 'product/update-shipping', params)
        return True

    def update_multi_shipping_by_id(self, id: str, country_prices: Optional[Dict[str, float]] = None,
                                    disabled_countries: Iterable[str] = (),
                                    wish_express_add_countries: Iterable[str] = (),
                                    wish_express_remove_countries: Iterable[str] = (),
                                    warehouse_name: Optional[str] = None,
                                    default_shipping_price: Optional[float] = None) -> bool:
        """Update shipping prices for several countries at once.

        Args:
            id (str): Product ID.
            country_prices (Optional[Dict[str, float]]): e.g. {"US": 10.99, "GB": 9.99}.
            disabled_countries (Iterable[str]): Countries to stop shipping to.
            wish_express_add_countries (Iterable[str]): Countries to enroll in Wish Express.
            wish_express_remove_countries (Iterable[str]): Countries to drop from Wish Express.
            warehouse_name (Optional[str]): Warehouse the prices apply to.
            default_shipping_price (Optional[float]): Price for countries not listed.
        """
        params: Dict[str, Any] = {'id': id}
        for country_code, price in (country_prices or {}).items():
            params[country_code] = price
        if disabled_countries:
            params['disabled_countries'] = list(disabled_countries)
        if wish_express_add_countries:
            params['wish_express_add_countries'] = list(wish_express_add_countries)
        if wish_express_remove_countries:
            params['wish_express_remove_countries'] = list(wish_express_remove_countries)
        if warehouse_name:
            params['warehouse_name'] = warehouse_name
        if default_shipping_price is not None:
            params['default_shipping_price'] = default_shipping_price
        self.get_response('POST', 'product/update-multi-shipping', params)
        return True

    def get_shipping_by_id(self, id: str, country: str) -> Dict:
        return self.get_response('GET', 'product/get-shipping', {'id': id, 'country': country}).data

    def get_all_shipping_by_id(self, id: str) -> Dict:
        return self.get_response('GET', 'product/get-all-shipping', {'id': id}).data

    # PRODUCT VARIATION

    def create_product_variation(self, params: Dict[str, Any]) -> WishProductVariation:
        response = self.get_response('POST', 'variant/add', params)
        return self.variation_parser.parse(response.data)

    def get_product_variation_by_sku(self, sku: str) -> WishProductVariation:
        response = self.get_response('GET', 'variant', {'sku': sku})
        return self.variation_parser.parse(response.data)

    def update_product_variation(self, variation: WishProductVariation) -> bool:
        self.get_response('POST', 'variant/update', variation.to_params(VARIATION_UPDATE_FIELDS))
        return True

    def change_product_variation_sku(self, sku: str, new_sku: str) -> bool:
        self.get_response('POST', 'variant/change-sku', {'sku': sku, 'new_sku': new_sku})
        return True

    def enable_product_variation(self, variation: WishProductVariation) -> bool:
        return self.enable_product_variation_by_sku(variation.sku)

    def enable_product_variation_by_sku(self, sku: str) -> bool:
        self.get_response('POST', 'variant/enable', {'sku': sku})
        return True

    def disable_product_variation(self, variation: WishProductVariation) -> bool:
        return self.disable_product_variation_by_sku(variation.sku)

    def disable_product_variation_by_sku(self, sku: str) -> bool:
        self.get_response('POST', 'variant/disable', {'sku': sku})
        return True

    def update_inventory_by_sku(self, sku: str, inventory: int) -> bool:
        self.get_response('POST', 'variant/update-inventory', {'sku': sku, 'inventory': inventory})
        return True

    def get_all_product_variations(self, should_stop: Optional[Callable[[], bool]] = None) -> List[WishProductVariation]:
        return self.get_response_iter('GET', 'variant/multi-get', self.variation_parser.parse,
                                      should_stop=should_stop)

    # ORDER

    def get_order_by_id(self, id: str) -> WishOrder:
        response = self.get_response('GET', 'order', {'id': id})
        return self.order_parser.parse(response.data)

    def get_all_changed_orders_since(self, since: Optional[str] = None,
                                     should_stop: Optional[Callable[[], bool]] = None) -> List[WishOrder]:
        """Fetch orders changed since ``since`` (ISO 8601 date or datetime), or all of them."""
        params = {'since': since} if since else {}
        return self.get_response_iter('GET', 'order/multi-get', self.order_parser.parse, params, should_stop)

    def get_all_unfulfilled_orders_since(self, since: Optional[str] = None,
                                         should_stop: Optional[Callable[[], bool]] = None) -> List[WishOrder]:
        params = {'since': since} if since else {}
        return self.get_response_iter('GET', 'order/get-fulfill', self.order_parser.parse, params, should_stop)

    def fulfill_order_by_id(self, id: str, tracker: WishTracker) -> bool:
        params = tracker.to_params()
        params['id'] = id
        self.get_response('POST', 'order/fulfill-one', params)
        return True

    def fulfill_order(self, order: WishOrder, tracker: WishTracker) -> bool:
        return self.fulfill_order_by_id(order.order_id, tracker)

    def refund_order_by_id(self, id: str, reason: Union[RefundReason, int], note: Optional[str] = None) -> bool:
        params: Dict[str, Any] = {'id': id, 'reason_code': int(reason)}
        if note:
            params['reason_note'] = note
        self.get_response('POST', 'order/refund', params)
        return True

    def refund_order(self, order: WishOrder, reason: Union[RefundReason, int], note: Optional[str] = None) -> bool:
        return self.refund_order_by_id(order.order_id, reason, note)

    def update_tracking_info_by_id(self, id: str, tracker: WishTracker) -> bool:
        params = tracker.to_params()
        params['id'] = id
        self.get_response('POST', 'order/modify-tracking', params)
        return True

    def update_tracking_info(self, order: WishOrder, tracker: WishTracker) -> bool:
        return self.update_tracking_info_by_id(order.order_id, tracker)

    def update_shipping_info_by_id(self, id: str, address: WishAddress) -> bool:
        params = address.to_params()
        params['id'] = id
        self.get_response('POST', 'order/change-shipping', params)
        return True

    def update_shipping_info(self, order: WishOrder, address: WishAddress) -> bool:
        return self.update_shipping_info_by_id(order.order_id, address)

    # TICKET

    def get_ticket_by_id(self, id: str) -> WishTicket:
        response = self.get_response('GET', 'ticket', {'id': id})
        return self.ticket_parser.parse(response.data)

    def get_all_action_required_tickets(self, should_stop: Optional[Callable[[], bool]] = None) -> List[WishTicket]:
        return self.get_response_iter('GET', 'ticket/get-action-required', self.ticket_parser.parse,
                                      should_stop=should_stop)

    def reply_to_ticket_by_id(self, id: str, reply: str) -> bool:
        self.get_response('POST', 'ticket/reply', {'id': id, 'reply': reply})
        return True

    def close_ticket_by_id(self, id: str) -> bool:
        self.get_response('POST', 'ticket/close', {'id': id})
        return True

    def appeal_ticket_by_id(self, id: str) -> bool:
        self.get_response('POST', 'ticket/appeal-to-wish-support', {'id': id})
        return True

    def reopen_ticket_by_id(self, id: str, reply: str) -> bool:
        self.get_response('POST', 'ticket/re-open', {'id': id, 'reply': reply})
        return True

    # NOTIFICATION

    def get_all_notifications(self) -> Any:
        return self.get_response('GET', 'noti/fetch-unviewed').data

    def mark_notification_as_viewed(self, id: str) -> Any:
        return self.get_response('POST', 'noti/mark-as-viewed', {'id': id}).data

    def get_unviewed_notification_count(self) -> Any:
        return self.get_response('GET', 'noti/get-unviewed-count').data

    def get_bd_announcements(self) -> Any:
        return self.get_response('GET', 'fetch-bd-announcement').data

    def get_system_update_notifications(self) -> Any:
        return self.get_response('GET', 'fetch-sys-updates-noti').data

    def get_infraction_count(self) -> Any:
        return self.get_response('GET', 'count/infractions').data

    def get_infraction_links(self) -> Any:
        return self.get_response('GET', 'get/infractions').data

    # DOWNLOAD JOBS

    def create_product_download_job(self, since: Optional[str] = None, limit: Optional[int] = None,
                                    sort: Optional[str] = None, warehouse_name: Optional[str] = None) -> Dict:
        """Start a bulk product export.

        Returns:
            Dict: Job descriptor, including ``job_id``.
        """
        params = {'since': since, 'limit': limit, 'sort': sort, 'warehouse_name': warehouse_name}
        params = {k: v for k, v in params.items() if v is not None}
        return self.get_response('POST', 'product/create-download-job', params).data

    def get_product_download_job_status(self, job_id: str) -> Dict:
        return self.get_response('POST', 'product/get-download-job-status', {'job_id': job_id}).data

    def cancel_product_download_job(self, job_id: str) -> Any:
        return self.get_response('POST', 'product/cancel-download-job', {'job_id': job_id}).data

    def create_order_download_job(self, start: Optional[str] = None, end: Optional[str] = None,
                                  limit: Optional[int] = None, sort: Optional[str] = None) -> Dict:
        """Start a bulk order export for orders between ``start`` and ``end``."""
        params = {'start': start, 'end': end, 'limit': limit, 'sort': sort}
        params = {k: v for k, v in params.items() if v is not None}
        return self.get_response('POST', 'order/create-download-job', params).data

    def get_order_download_job_status(self, job_id: str) -> Dict:
        return self.get_response('POST', 'order/get-download-job-status', {'job_id': job_id}).data

    def cancel_order_download_job(self, job_id: str) -> Any:
        return self.get_response('POST', 'order/cancel-download-job', {'job_id': job_id}).data
