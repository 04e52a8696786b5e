"""Tests for provider adapters, configuration and result helpers."""
from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest
from langchain_core.messages import AIMessage

from tirthyatra.core.config import ApiSettings, is_usable_key
from tirthyatra.core.results import Failure, Success, capture
from tirthyatra.core.schemas import Coordinates, ItineraryParams
from tirthyatra.services.amadeus import AmadeusFlights, format_iso_duration
from tirthyatra.services.geocoding import OpenCageGeocoder
from tirthyatra.services.hotels import BookingHotels
from tirthyatra.services.llm import ChatTextGenerator, create_text_generator, fallback_guide
from tirthyatra.services.places import OpenTripMap
from tirthyatra.services.rail import IndianRail

API_KEY = "live-key-0123456789"


def _response(payload, status_code: int = 200) -> Mock:
    """HTTPX response mock; response methods are sync."""

    response = Mock()
    response.status_code = status_code
    response.is_error = status_code >= 400
    response.json.return_value = payload
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def mock_client():
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get.return_value = _response({})
    return mock_client


def _with_client(factory, mock_client):
    with patch("httpx.AsyncClient", return_value=mock_client):
        client = factory()
    client._client = mock_client
    return client


# Configuration
@pytest.mark.parametrize(
    "value, expected",
    [
        (None, False),
        ("", False),
        ("short", False),
        ("your_api_key_here", False),
        ("demo-key-123456", False),
        ("PLACEHOLDER-0000000", False),
        (API_KEY, True),
    ],
)
def test_is_usable_key(value, expected):
    assert is_usable_key(value) is expected


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("OPENTRIPMAP_API_KEY", API_KEY)
    monkeypatch.setenv("AMADEUS_API", "amadeus-id")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("TIRTHYATRA_DATA_DIR", "/tmp/tirthyatra-test")
    monkeypatch.delenv("OPENCAGE_API_KEY", raising=False)

    settings = ApiSettings.from_env()

    assert settings.opentripmap_api_key == API_KEY
    assert settings.amadeus_api_key == "amadeus-id"
    assert settings.has_usable_key("opentripmap_api_key")
    assert not settings.has_usable_key("opencage_api_key")
    assert settings.allowed_origins() == ["https://a.example", "https://b.example"]
    assert str(settings.resolved_data_dir()) == "/tmp/tirthyatra-test"


def test_settings_ensure_raises_for_missing_value():
    with pytest.raises(RuntimeError, match="firebase_credentials"):
        ApiSettings().ensure("firebase_credentials")


# Result helpers
async def test_capture_wraps_timeouts():
    async def _call():
        raise httpx.ReadTimeout("slow")

    result = await capture("opencage", _call)
    assert isinstance(result, Failure)
    assert result.error.kind == "timeout"
    assert result.error.provider == "opencage"


async def test_capture_wraps_parse_errors():
    async def _call():
        return {}["missing"]

    result = await capture("booking", _call)
    assert isinstance(result, Failure)
    assert result.error.kind == "malformed"


class TestOpenCageGeocoder:
    async def test_geocode_success(self, mock_client):
        mock_client.get.return_value = _response({"results": [{"geometry": {"lat": 25.3176, "lng": 82.9739}}]})
        geocoder = _with_client(lambda: OpenCageGeocoder(API_KEY), mock_client)

        result = await geocoder.geocode("Varanasi")

        assert result == Success(Coordinates(lat=25.3176, lng=82.9739))
        params = mock_client.get.call_args.kwargs["params"]
        assert params["q"] == "Varanasi"
        assert params["limit"] == 1

    async def test_geocode_no_results(self, mock_client):
        mock_client.get.return_value = _response({"results": []})
        geocoder = _with_client(lambda: OpenCageGeocoder(API_KEY), mock_client)

        assert await geocoder.geocode("Nowhere") == Success(None)

    async def test_geocode_network_error(self, mock_client):
        mock_client.get.side_effect = httpx.ConnectError("unreachable")
        geocoder = _with_client(lambda: OpenCageGeocoder(API_KEY), mock_client)

        result = await geocoder.geocode("Varanasi")
        assert isinstance(result, Failure)
        assert result.error.kind == "network"

    def test_placeholder_key_is_not_configured(self):
        with patch("httpx.AsyncClient"):
            assert OpenCageGeocoder("your_opencage_key").is_configured() is False


class TestOpenTripMap:
    async def test_places_near_parses_points(self, mock_client):
        mock_client.get.return_value = _response(
            [
                {
                    "name": "Kashi Vishwanath Temple",
                    "point": {"lat": 25.3109, "lon": 83.0107},
                    "kinds": "religion,hindu_temples,interesting_places",
                    "rate": 3,
                },
                {"name": "No point"},
            ]
        )
        places = _with_client(lambda: OpenTripMap(API_KEY), mock_client)

        result = await places.places_near(Coordinates(lat=25.3, lng=82.9), 10_000, ["religion"])

        assert isinstance(result, Success)
        assert len(result.value) == 1
        place = result.value[0]
        assert place.name == "Kashi Vishwanath Temple"
        assert place.kinds[0] == "religion"
        assert mock_client.get.call_args.kwargs["params"]["kinds"] == "religion"

    async def test_unexpected_payload_is_malformed(self, mock_client):
        mock_client.get.return_value = _response({"error": "Unknown apikey"})
        places = _with_client(lambda: OpenTripMap(API_KEY), mock_client)

        result = await places.places_near(Coordinates(lat=25.3, lng=82.9), 10_000, ["religion"])
        assert isinstance(result, Failure)
        assert result.error.kind == "malformed"


class TestBookingHotels:
    async def test_destination_id_prefers_city(self, mock_client):
        mock_client.get.return_value = _response(
            [
                {"dest_type": "landmark", "dest_id": "900"},
                {"dest_type": "city", "dest_id": -2092174},
            ]
        )
        hotels = _with_client(lambda: BookingHotels(API_KEY), mock_client)

        assert await hotels.destination_id("Varanasi") == Success("-2092174")
        headers = mock_client.get.call_args.kwargs["headers"]
        assert headers["X-RapidAPI-Key"] == API_KEY

    async def test_search_hotels_scales_review_score(self, mock_client):
        mock_client.get.return_value = _response(
            {
                "result": [
                    {
                        "hotel_name": "Ganges View",
                        "review_score": 8.8,
                        "min_total_price": 5400,
                        "hotel_facilities": "WiFi, Parking",
                        "address": "Assi Ghat",
                    },
                    {"review_score": 9.0},
                ]
            }
        )
        hotels = _with_client(lambda: BookingHotels(API_KEY), mock_client)

        result = await hotels.search_hotels("-2092174", date(2025, 3, 1), date(2025, 3, 3), 2)

        assert isinstance(result, Success)
        assert len(result.value) == 1
        hotel = result.value[0]
        assert hotel.rating == pytest.approx(4.4)
        assert hotel.facilities == ["WiFi", "Parking"]
        params = mock_client.get.call_args.kwargs["params"]
        assert params["checkin_date"] == "2025-03-01"
        assert params["adults_number"] == 2


class TestIndianRail:
    async def test_trains_between_uses_bearer_token(self, mock_client):
        mock_client.get.return_value = _response(
            {
                "data": [
                    {
                        "train_number": 12560,
                        "train_name": "Shiv Ganga Express",
                        "from_time": "20:05",
                        "to_time": "08:20",
                        "travel_time": "12h 15m",
                        "fares": [{"class": "SL", "fare": 485}, {"class": "3A", "fare": "1290.4"}],
                    }
                ]
            }
        )
        rail = _with_client(lambda: IndianRail("client-id-0001", "client-secret-0001"), mock_client)

        result = await rail.trains_between("NDLS", "BSB", "tok")

        assert isinstance(result, Success)
        train = result.value[0]
        assert train.number == "12560"
        assert train.fare_tiers == {"SL": 485, "3A": 1290}
        assert mock_client.get.call_args.kwargs["headers"] == {"Authorization": "Bearer tok"}

    async def test_access_token_goes_through_cache(self, mock_client):
        token_response = _response({"access_token": "rail-tok", "expires_in": 3600})
        mock_client.post.return_value = token_response
        with patch("httpx.AsyncClient", return_value=mock_client):
            rail = IndianRail("client-id-0001", "client-secret-0001")

        assert await rail.access_token() == Success("rail-tok")
        assert await rail.access_token() == Success("rail-tok")
        mock_client.post.assert_awaited_once()


class TestAmadeusFlights:
    OFFER = {
        "itineraries": [
            {
                "duration": "PT1H35M",
                "segments": [
                    {
                        "carrierCode": "6E",
                        "number": "2231",
                        "departure": {"at": "2025-03-01T06:10:00"},
                        "arrival": {"at": "2025-03-01T07:45:00"},
                    }
                ],
            }
        ],
        "price": {"total": "4321.50"},
        "travelerPricings": [{"fareDetailsBySegment": [{"cabin": "ECONOMY"}]}],
    }

    @pytest.mark.parametrize(
        "value, expected",
        [("PT1H35M", "1h 35m"), ("PT2H", "2h 00m"), ("PT45M", "0h 45m"), ("bogus", "bogus")],
    )
    def test_format_iso_duration(self, value, expected):
        assert format_iso_duration(value) == expected

    async def test_search_flights_parses_offers(self, mock_client):
        mock_client.get.return_value = _response({"data": [self.OFFER]})
        flights = _with_client(lambda: AmadeusFlights("amadeus-id-0001", "amadeus-secret-01"), mock_client)

        result = await flights.search_flights("DEL", "VNS", date(2025, 3, 1), "tok")

        assert isinstance(result, Success)
        itinerary = result.value[0]
        assert itinerary.flight_number == "6E-2231"
        assert itinerary.duration == "1h 35m"
        assert itinerary.price == pytest.approx(4321.5)
        params = mock_client.get.call_args.kwargs["params"]
        assert params["originLocationCode"] == "DEL"
        assert params["departureDate"] == "2025-03-01"
        assert params["currencyCode"] == "INR"

    async def test_unauthorized_invalidates_token(self, mock_client):
        request = httpx.Request("GET", "https://test.api.amadeus.com/v2/shopping/flight-offers")
        response = _response({}, status_code=401)
        response.text = '{"errors": [{"code": 38190, "title": "Invalid access token"}]}'
        response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "unauthorized", request=request, response=httpx.Response(401, request=request)
        )
        mock_client.get.return_value = response
        flights = _with_client(lambda: AmadeusFlights("amadeus-id-0001", "amadeus-secret-01"), mock_client)
        flights._token.invalidate = Mock()

        result = await flights.search_flights("DEL", "VNS", date(2025, 3, 1), "stale")

        assert isinstance(result, Failure)
        assert result.error.status_code == 401
        flights._token.invalidate.assert_called_once()


class TestChatTextGenerator:
    async def test_generate_returns_content(self):
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="  Day 1: Ganga Aarti.  "))
        generator = ChatTextGenerator(llm)

        assert await generator.generate("plan") == Success("Day 1: Ganga Aarti.")
        messages = llm.ainvoke.await_args.args[0]
        assert messages[-1].content == "plan"

    async def test_generate_failure_is_reported(self):
        llm = Mock()
        llm.ainvoke = AsyncMock(side_effect=RuntimeError("rate limited"))

        result = await ChatTextGenerator(llm).generate("plan")

        assert isinstance(result, Failure)
        assert "rate limited" in result.error.message

    async def test_empty_completion_is_malformed(self):
        llm = Mock()
        llm.ainvoke = AsyncMock(return_value=AIMessage(content="   "))

        result = await ChatTextGenerator(llm).generate("plan")
        assert isinstance(result, Failure)
        assert result.error.kind == "malformed"

    def test_no_key_means_no_generator(self):
        assert create_text_generator(ApiSettings(xai_api_key="your_xai_key")) is None

    def test_fallback_guide_covers_every_day(self):
        params = ItineraryParams(origin="Delhi", destination="Varanasi", duration=3, budget="mid")
        text = fallback_guide(params, ["Kashi Vishwanath Temple"])
        assert "Day 1" in text and "Day 3" in text
        assert "Kashi Vishwanath Temple" in text
