"""Fallback datasets used whenever live provider data is unavailable.

Curated lists exist for well-known pilgrimage cities; every other destination
gets generic records templated on its name. All randomness comes from the
``random.Random`` instance handed to ``MockDataGenerator`` so tests can seed it.
"""
from __future__ import annotations

import random
from typing import Dict, List, Optional, Sequence, Tuple

from tirthyatra.core.schemas import (
    PLACEHOLDER_IMAGE,
    Attraction,
    Coordinates,
    Hotel,
    Temple,
    TransportOption,
)

BUDGET_MULTIPLIERS: Dict[str, float] = {"low": 1.0, "mid": 2.0, "high": 3.5, "luxury": 6.0}
BASE_HOTEL_PRICE = 2000
PRICE_VARIANCE = 0.2
MIN_ITEMS, MAX_ITEMS = 4, 6
JITTER_DEG = 0.05

# name, puja timings, online booking
CURATED_TEMPLES: Dict[str, List[Tuple[str, str, bool]]] = {
    "varanasi": [
        ("Kashi Vishwanath Temple", "3:00 AM - 11:00 PM", True),
        ("Sankat Mochan Hanuman Temple", "5:00 AM - 10:00 PM", False),
        ("Durga Temple", "6:00 AM - 12:00 PM, 4:00 PM - 9:00 PM", True),
        ("Kaal Bhairav Temple", "5:00 AM - 1:30 PM, 4:30 PM - 9:30 PM", False),
        ("Annapurna Devi Mandir", "4:00 AM - 11:00 AM, 7:00 PM - 11:00 PM", False),
        ("Tulsi Manas Mandir", "5:30 AM - 12:00 PM, 3:30 PM - 9:00 PM", False),
        ("New Vishwanath Temple (BHU)", "4:00 AM - 12:00 PM, 1:00 PM - 9:00 PM", False),
    ],
    "tirupati": [
        ("Sri Venkateswara Temple", "2:30 AM - 1:00 AM", True),
        ("Sri Kapileswara Swamy Temple", "6:00 AM - 8:00 PM", False),
        ("ISKCON Tirupati", "4:30 AM - 1:00 PM, 4:00 PM - 8:30 PM", True),
        ("Sri Padmavathi Ammavari Temple", "5:00 AM - 9:00 PM", True),
        ("Sri Govindaraja Swamy Temple", "5:00 AM - 9:00 PM", False),
        ("Sri Kalyana Venkateswara Swamy Temple", "6:00 AM - 8:00 PM", False),
    ],
    "rishikesh": [
        ("Neelkanth Mahadev Temple", "5:00 AM - 6:00 PM", False),
        ("Trimbakeshwar Temple (Tera Manzil)", "6:00 AM - 8:00 PM", False),
        ("Bharat Mandir", "5:30 AM - 9:00 PM", False),
        ("Parmarth Niketan", "5:00 AM - 9:00 PM", True),
        ("Raghunath Temple", "6:00 AM - 8:30 PM", False),
        ("Swarg Niwas Temple", "6:00 AM - 9:00 PM", False),
    ],
    "haridwar": [
        ("Har Ki Pauri", "Open 24 hours; Ganga Aarti at sunset", False),
        ("Mansa Devi Temple", "5:00 AM - 9:00 PM", False),
        ("Chandi Devi Temple", "6:00 AM - 8:00 PM", False),
        ("Maya Devi Temple", "6:00 AM - 10:00 PM", False),
        ("Bharat Mata Mandir", "8:00 AM - 7:00 PM", False),
        ("Daksha Mahadev Temple", "6:00 AM - 8:00 PM", False),
    ],
    "amritsar": [
        ("Golden Temple (Harmandir Sahib)", "Open 24 hours", False),
        ("Durgiana Temple", "6:00 AM - 10:00 PM", False),
        ("Mata Lal Devi Temple", "6:00 AM - 9:00 PM", False),
        ("Gurudwara Baba Atal Rai", "5:00 AM - 10:00 PM", False),
        ("Ram Tirath Temple", "6:00 AM - 8:00 PM", False),
    ],
    "puri": [
        ("Jagannath Temple", "5:00 AM - 11:00 PM", True),
        ("Gundicha Temple", "6:00 AM - 9:00 PM", False),
        ("Lokanath Temple", "6:00 AM - 9:00 PM", False),
        ("Sakshi Gopal Temple", "6:00 AM - 8:00 PM", False),
        ("Mausi Maa Temple", "6:00 AM - 9:00 PM", False),
    ],
    "madurai": [
        ("Meenakshi Amman Temple", "5:00 AM - 12:30 PM, 4:00 PM - 10:00 PM", True),
        ("Koodal Azhagar Temple", "6:00 AM - 12:00 PM, 4:00 PM - 9:00 PM", False),
        ("Thiruparankundram Murugan Temple", "5:30 AM - 1:00 PM, 4:00 PM - 9:00 PM", False),
        ("Alagar Kovil", "6:00 AM - 12:30 PM, 3:30 PM - 8:00 PM", False),
        ("Pazhamudircholai", "6:00 AM - 1:00 PM, 4:00 PM - 8:00 PM", False),
    ],
    "ujjain": [
        ("Mahakaleshwar Jyotirlinga", "4:00 AM - 11:00 PM", True),
        ("Kal Bhairav Temple", "6:00 AM - 8:00 PM", False),
        ("Harsiddhi Temple", "5:00 AM - 10:00 PM", False),
        ("Chintaman Ganesh Temple", "5:00 AM - 9:00 PM", False),
        ("Mangalnath Temple", "6:00 AM - 8:00 PM", False),
        ("Sandipani Ashram", "6:00 AM - 6:00 PM", False),
    ],
    "shirdi": [
        ("Shri Saibaba Samadhi Mandir", "4:00 AM - 11:15 PM", True),
        ("Dwarkamai", "5:00 AM - 9:30 PM", False),
        ("Chavadi", "5:00 AM - 9:30 PM", False),
        ("Shani Shingnapur Temple", "Open 24 hours", False),
        ("Khandoba Temple", "6:00 AM - 8:00 PM", False),
    ],
    "vrindavan": [
        ("Banke Bihari Temple", "7:45 AM - 12:00 PM, 5:30 PM - 9:30 PM", False),
        ("Prem Mandir", "5:30 AM - 12:00 PM, 4:30 PM - 8:30 PM", False),
        ("ISKCON Vrindavan", "4:30 AM - 1:00 PM, 4:30 PM - 8:45 PM", True),
        ("Radha Raman Temple", "8:00 AM - 12:30 PM, 6:00 PM - 8:30 PM", False),
        ("Govind Dev Ji Temple", "6:00 AM - 12:00 PM, 5:00 PM - 9:00 PM", False),
        ("Nidhivan", "5:00 AM - 8:00 PM", False),
    ],
}

GENERIC_TEMPLE_NAMES = (
    "{dest} Shiva Temple",
    "Sri {dest} Devi Mandir",
    "{dest} Hanuman Temple",
    "Ancient {dest} Vishnu Temple",
    "{dest} Ganesh Mandir",
    "Sacred Shrine of {dest}",
    "{dest} Durga Temple",
    "{dest} Ram Mandir",
)

GENERIC_TEMPLE_TIMINGS = (
    "5:00 AM - 12:00 PM, 4:00 PM - 9:00 PM",
    "6:00 AM - 11:00 PM",
    "4:00 AM - 10:00 PM",
    "5:30 AM - 1:00 PM, 4:30 PM - 8:30 PM",
)

# name, category
CURATED_ATTRACTIONS: Dict[str, List[Tuple[str, str]]] = {
    "varanasi": [
        ("Dashashwamedh Ghat Ganga Aarti", "Spiritual"),
        ("Sarnath", "Heritage"),
        ("Ramnagar Fort", "Heritage"),
        ("Assi Ghat", "Spiritual"),
        ("Sunrise Boat Ride on the Ganga", "Natural"),
        ("Banaras Hindu University", "Cultural"),
        ("Vishwanath Gali Market", "Cultural"),
    ],
    "tirupati": [
        ("Silathoranam", "Natural"),
        ("Talakona Waterfalls", "Natural"),
        ("Sri Venkateswara Museum", "Cultural"),
        ("Chandragiri Fort", "Heritage"),
        ("Akasa Ganga Teertham", "Spiritual"),
        ("Papavinasanam", "Spiritual"),
    ],
    "rishikesh": [
        ("Laxman Jhula", "Heritage"),
        ("Ram Jhula", "Heritage"),
        ("Triveni Ghat Aarti", "Spiritual"),
        ("Beatles Ashram", "Cultural"),
        ("River Rafting at Shivpuri", "Natural"),
        ("Vashishta Gufa", "Spiritual"),
    ],
    "amritsar": [
        ("Jallianwala Bagh", "Heritage"),
        ("Wagah Border Ceremony", "Cultural"),
        ("Partition Museum", "Cultural"),
        ("Gobindgarh Fort", "Heritage"),
        ("Hall Bazaar", "Cultural"),
    ],
    "puri": [
        ("Puri Beach", "Natural"),
        ("Konark Sun Temple", "Heritage"),
        ("Chilika Lake", "Natural"),
        ("Raghurajpur Artist Village", "Cultural"),
        ("Swargadwar Beach", "Spiritual"),
    ],
}

GENERIC_ATTRACTIONS = (
    ("{dest} Ganga Aarti Ghat", "Spiritual"),
    ("Ancient Fort of {dest}", "Heritage"),
    ("{dest} River Cruise", "Natural"),
    ("{dest} Local Market", "Cultural"),
    ("{dest} Heritage Walk", "Heritage"),
    ("{dest} Spiritual Center", "Spiritual"),
    ("{dest} Museum", "Cultural"),
    ("{dest} Sunset Point", "Natural"),
)

# name template, rating, price factor, location template, amenities, cancellation
HOTEL_TEMPLATES = (
    ("Sacred Stay Hotel", 4.2, 1.0, "Near main temple, {dest}",
     ["Free WiFi", "AC", "Restaurant", "Room Service"], "Free cancellation until 24 hours before check-in"),
    ("Spiritual Retreat Inn", 4.0, 0.8, "City center, {dest}",
     ["Free WiFi", "Breakfast", "Parking", "Temple Shuttle"], "Free cancellation until 48 hours before check-in"),
    ("Pilgrim Palace", 4.5, 1.2, "Riverside, {dest}",
     ["Free WiFi", "AC", "Pool", "Spa", "Restaurant"], "Non-refundable"),
    ("{dest} Dharamshala", 3.6, 0.4, "Temple road, {dest}",
     ["Pure Veg Meals", "Locker", "Hot Water"], "Free cancellation until check-in"),
    ("Hotel {dest} Residency", 3.9, 0.9, "Railway station road, {dest}",
     ["Free WiFi", "AC", "Travel Desk"], "Free cancellation until 24 hours before check-in"),
    ("Divine Heritage Haveli", 4.6, 1.5, "Old city, {dest}",
     ["Free WiFi", "Rooftop Restaurant", "Yoga Sessions", "AC"], "Non-refundable"),
    ("Ashram Guest House {dest}", 4.1, 0.5, "Ashram campus, {dest}",
     ["Satvik Meals", "Meditation Hall", "Library"], "Free cancellation until 72 hours before check-in"),
)

# name, departure, arrival, duration, base price, class
TRAIN_TEMPLATES = (
    ("Shatabdi Express", "06:00 AM", "02:30 PM", "8h 30m", 1850, "CC"),
    ("Jan Shatabdi", "10:15 AM", "07:45 PM", "9h 30m", 890, "2S"),
    ("Rajdhani Express", "04:55 PM", "06:10 AM", "13h 15m", 2950, "3A"),
    ("Vande Bharat Express", "06:00 AM", "02:00 PM", "8h 00m", 1750, "CC"),
    ("Superfast Mail", "09:30 PM", "11:45 AM", "14h 15m", 640, "SL"),
    ("Garib Rath Express", "07:20 PM", "09:05 AM", "13h 45m", 1150, "3A"),
    ("Duronto Express", "11:00 PM", "10:20 AM", "11h 20m", 2150, "2A"),
)

FLIGHT_TEMPLATES = (
    ("IndiGo 6E-{num}", "08:30 AM", "10:15 AM", "1h 45m", 4500, "Economy"),
    ("SpiceJet SG-{num}", "02:20 PM", "04:05 PM", "1h 45m", 3890, "Economy"),
    ("Air India AI-{num}", "06:45 AM", "08:40 AM", "1h 55m", 5200, "Economy"),
    ("Akasa Air QP-{num}", "05:10 PM", "06:55 PM", "1h 45m", 4100, "Economy"),
    ("Air India Express IX-{num}", "11:25 AM", "01:20 PM", "1h 55m", 3650, "Economy"),
    ("Air India AI-{num}", "07:50 PM", "09:45 PM", "1h 55m", 14800, "Business"),
)

BUS_TEMPLATES = (
    ("Volvo Multi-Axle AC Sleeper", "09:00 PM", "08:00 AM", "11h 00m", 1200, "AC Sleeper"),
    ("Ordinary Express", "11:30 PM", "10:30 AM", "11h 00m", 650, "Non-AC"),
    ("Scania AC Semi-Sleeper", "08:15 PM", "07:30 AM", "11h 15m", 950, "AC Semi-Sleeper"),
    ("State Transport Deluxe", "06:00 AM", "05:30 PM", "11h 30m", 540, "Non-AC"),
    ("Bharat Benz AC Sleeper", "10:00 PM", "08:45 AM", "10h 45m", 1350, "AC Sleeper"),
)


def destination_key(destination: str) -> str:
    return (destination or "").strip().lower()


def display_name(destination: str) -> str:
    cleaned = (destination or "").strip()
    return cleaned.title() if cleaned else "Your Destination"


def _curated_for(dataset: Dict[str, list], destination: str) -> Optional[list]:
    """Exact key match first, then a key contained in the destination text."""

    key = destination_key(destination)
    if key in dataset:
        return dataset[key]
    for known, items in dataset.items():
        if known in key:
            return items
    return None


class MockDataGenerator:
    """Deterministic-shape, randomized-value fallback records."""

    def __init__(self, rng: Optional[random.Random] = None, *, seed: Optional[int] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def _count(self, available: int) -> int:
        return min(self.rng.randint(MIN_ITEMS, MAX_ITEMS), available)

    def _pick(self, items: Sequence) -> list:
        return self.rng.sample(list(items), self._count(len(items)))

    def _jitter(self, center: Coordinates) -> Coordinates:
        lat = min(max(center.lat + self.rng.uniform(-JITTER_DEG, JITTER_DEG), -90.0), 90.0)
        lng = min(max(center.lng + self.rng.uniform(-JITTER_DEG, JITTER_DEG), -180.0), 180.0)
        return Coordinates(lat=lat, lng=lng)

    def _rating(self, low: float = 3.5, high: float = 5.0) -> float:
        return round(self.rng.uniform(low, high), 1)

    def _vary(self, price: float) -> int:
        varied = price * self.rng.uniform(1 - PRICE_VARIANCE, 1 + PRICE_VARIANCE)
        return max(1, int(round(varied)))

    def has_curated_temples(self, destination: str) -> bool:
        return _curated_for(CURATED_TEMPLES, destination) is not None

    def temples(self, destination: str, center: Coordinates) -> List[Temple]:
        place = display_name(destination)
        curated = _curated_for(CURATED_TEMPLES, destination)
        if curated is not None:
            rows = self._pick(curated)
        else:
            names = self._pick(GENERIC_TEMPLE_NAMES)
            rows = [
                (name.format(dest=place), self.rng.choice(GENERIC_TEMPLE_TIMINGS), self.rng.random() > 0.5)
                for name in names
            ]
        return [
            Temple(
                name=name,
                location=place,
                puja_timings=timings,
                description=f"Sacred temple in {place} with rich spiritual heritage and divine atmosphere",
                image_url=f"{PLACEHOLDER_IMAGE}?temple={index}",
                online_booking=online,
                coordinates=self._jitter(center),
            )
            for index, (name, timings, online) in enumerate(rows)
        ]

    def attractions(self, destination: str, center: Coordinates) -> List[Attraction]:
        place = display_name(destination)
        curated = _curated_for(CURATED_ATTRACTIONS, destination)
        rows = self._pick(curated if curated is not None else GENERIC_ATTRACTIONS)
        return [
            Attraction(
                name=name.format(dest=place),
                type=category,
                description=f"Experience the beauty and culture of {place}",
                rating=self._rating(3.0, 5.0),
                image_url=f"{PLACEHOLDER_IMAGE}?attraction={index}",
                coordinates=self._jitter(center),
            )
            for index, (name, category) in enumerate(rows)
        ]

    def hotels(self, destination: str, budget: str) -> List[Hotel]:
        """Hotel prices scale with the budget tier before the random variance is applied."""

        place = display_name(destination)
        multiplier = BUDGET_MULTIPLIERS.get(budget, BUDGET_MULTIPLIERS["low"])
        rows = self._pick(HOTEL_TEMPLATES)
        hotels = []
        for index, (name, rating, factor, location, amenities, cancellation) in enumerate(rows):
            hotels.append(
                Hotel(
                    name=name.format(dest=place),
                    rating=rating,
                    price=self._vary(BASE_HOTEL_PRICE * multiplier * factor),
                    location=location.format(dest=place),
                    amenities=list(amenities),
                    image_url=f"{PLACEHOLDER_IMAGE}?hotel={index + 1}",
                    cancellation=cancellation,
                )
            )
        return hotels

    def _transport(self, mode: str, templates: Sequence[tuple]) -> List[TransportOption]:
        options = []
        for name, departure, arrival, duration, price, travel_class in self._pick(templates):
            options.append(
                TransportOption(
                    type=mode,
                    name=name.format(num=self.rng.randint(100, 999)),
                    departure=departure,
                    arrival=arrival,
                    duration=duration,
                    price=self._vary(price),
                    travel_class=travel_class,
                )
            )
        return options

    def trains(self, origin: str, destination: str) -> List[TransportOption]:
        return self._transport("train", TRAIN_TEMPLATES)

    def flights(self, origin: str, destination: str) -> List[TransportOption]:
        return self._transport("flight", FLIGHT_TEMPLATES)

    def buses(self, origin: str, destination: str) -> List[TransportOption]:
        return self._transport("bus", BUS_TEMPLATES)
