# tests/test_parsers.py
import pytest
from wish_merchant.api.exceptions import ConversionError
from wish_merchant.api.client import VARIATION_UPDATE_FIELDS
from wish_merchant.api.models import WishAddress, WishProduct, WishTracker
from wish_merchant.api.parsers import OrderParser, ProductParser, TicketParser, VariationParser
from wish_merchant.api.session import encode_params

def test_product_parser():
    parser = ProductParser()
    product = parser.parse({"Product": {
        "id": "p1",
        "name": "Mug",
        "tags": [{"Tag": {"id": "mug", "name": "mug"}}, {"Tag": {"id": "cup", "name": "cup"}}],
        "extra_images": "http://img/1.jpg|http://img/2.jpg",
        "number_sold": "7",
        "variants": [{"Variant": {"sku": "mug-red", "price": "9.99", "inventory": "3", "enabled": "True"}}],
    }})
    assert product.id == "p1"
    assert product.tags == ["mug", "cup"]
    assert product.extra_images == ["http://img/1.jpg", "http://img/2.jpg"]
    assert product.number_sold == 7
    assert product.variants[0].sku == "mug-red"
    assert product.variants[0].price == 9.99
    assert product.variants[0].inventory == 3
    assert product.variants[0].enabled is True

def test_unwrapped_record_is_accepted():
    variation = VariationParser().parse({"sku": "s1", "size": "XL"})
    assert variation.sku == "s1"
    assert variation.size == "XL"

def test_order_parser():
    order = OrderParser().parse({"Order": {
        "order_id": "o1",
        "state": "APPROVED",
        "quantity": "2",
        "order_total": "21.5",
        "ShippingDetail": {"name": "Ann", "city": "Austin", "country": "US", "zipcode": "73301"},
    }})
    assert order.order_id == "o1"
    assert order.quantity == 2
    assert order.order_total == 21.5
    assert order.shipping_detail.city == "Austin"
    assert order.shipping_detail.street_address2 is None

def test_ticket_parser():
    ticket = TicketParser().parse({"Ticket": {
        "id": "t1",
        "subject": "Where is my order",
        "replies": [{"Reply": {"message": "hi"}}],
        "items": [{"Order": {"order_id": "o1"}}],
    }})
    assert ticket.id == "t1"
    assert ticket.replies == [{"message": "hi"}]
    assert ticket.items[0].order_id == "o1"

def test_missing_required_field():
    with pytest.raises(ConversionError) as exc_info:
        ProductParser().parse({"Product": {"name": "no id"}})
    assert exc_info.value.model == "Product"

def test_bad_number():
    with pytest.raises(ConversionError):
        OrderParser().parse({"Order": {"order_id": "o1", "price": "free"}})

def test_non_object_record():
    with pytest.raises(ConversionError, match="not an object"):
        TicketParser().parse("t1")

def test_to_params_skips_unset_fields():
    product = WishProduct(id="p1", name="Mug", tags=["a", "b"])
    assert product.to_params(["id", "name", "tags", "brand", "extra_images"]) == {
        "id": "p1", "name": "Mug", "tags": ["a", "b"]
    }
    assert WishTracker("USPS", "123").to_params() == {"tracking_provider": "USPS", "tracking_number": "123"}

def test_extra_images_keep_pipe_separator_when_sent_back():
    product = ProductParser().parse({"Product": {
        "id": "p1", "tags": "mug,cup", "extra_images": "http://a/1.jpg|http://a/2.jpg",
    }})
    params = encode_params(product.to_params(["id", "tags", "extra_images"]))
    assert params["extra_images"] == "http://a/1.jpg|http://a/2.jpg"
    assert params["tags"] == "mug,cup"

def test_variation_main_image_from_all_images():
    variation = VariationParser().parse({"Variant": {"sku": "s", "all_images": "http://a/1.jpg|http://a/2.jpg"}})
    assert variation.main_image == "http://a/1.jpg"
    assert variation.to_params(VARIATION_UPDATE_FIELDS) == {"sku": "s", "main_image": "http://a/1.jpg"}

def test_variation_without_images():
    assert VariationParser().parse({"Variant": {"sku": "s"}}).main_image is None

def test_partial_address_sends_only_set_fields():
    address = WishAddress(name="Ann", city="Austin")
    assert address.to_params() == {"name": "Ann", "city": "Austin"}

def test_parsed_address_round_trip_has_no_blank_fields():
    order = OrderParser().parse({"Order": {"order_id": "o1", "ShippingDetail": {"name": "Ann", "country": "US"}}})
    assert order.shipping_detail.to_params() == {"name": "Ann", "country": "US"}
