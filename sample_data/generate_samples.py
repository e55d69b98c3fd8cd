#!/usr/bin/env python3
"""Generate a Realtime Database import file with sample deliveries, scale tickets and ratings.

The output mirrors what the driver app writes, including its rough edges:
mixed-case assignment emails, deliveries assigned by uid only, missing
optional fields and ratings without a score.
"""
import argparse
import json
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path


CUSTOMERS = [
    ("Lakeside Landscaping", "12 Quarry Rd"),
    ("Gulf Coast Pools", "881 Tamiami Trl"),
    ("Palm Grove HOA", "4 Fairway Ct"),
    ("Bayshore Builders", "2210 Bayshore Blvd"),
    ("Cypress Nursery", "77 Orange River Rd"),
]

MATERIALS = ["Topsoil", "Mulch", "Fill Dirt", "River Rock", "Shell", "Screened Sand"]

STATUSES = ["pending", "assigned", "in_transit", "delivered", "cancelled"]

COMMENTS = ["On time and careful", "Dumped in the right spot", "Late but friendly", "", None]


def _millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def generate_delivery(index: int, driver: dict, now: datetime) -> dict:
    customer, address = random.choice(CUSTOMERS)
    yards = random.choice([4, 6, 8, 10, 12])
    revenue = round(yards * random.uniform(38, 55), 2)
    details = {
        "customerName": customer,
        "address": address,
        "items": random.sample(MATERIALS, k=random.randint(1, 2)),
        "yardsDelivered": yards,
        "revenue": revenue,
        "profit": round(revenue * random.uniform(0.15, 0.35), 2),
    }

    mode = index % 4
    if mode == 0:
        details["assignedDriverEmail"] = driver["email"].upper()
    elif mode == 1:
        details["assignedDriverId"] = driver["uid"]
    elif mode == 2:
        details["assignedDriverEmail"] = driver["email"]
        details["assignedDriverId"] = driver["uid"]
    else:
        # Older app builds stored numbers as strings and skipped the address
        details["assignedDriverEmail"] = driver["email"]
        details["revenue"] = str(revenue)
        details.pop("address")

    return {
        "status": random.choice(STATUSES),
        "createdAt": _millis(now - timedelta(days=random.randint(0, 60), hours=random.randint(0, 23))),
        "details": details,
    }


def generate_ticket(load_id: str, now: datetime) -> dict:
    file_name = f"scale_{load_id}.jpg"
    return {
        "url": f"https://storage.example.com/scale-tickets/{file_name}",
        "fileName": file_name,
        "uploadedAt": (now - timedelta(days=random.randint(0, 30))).isoformat(),
        "loadId": load_id,
    }


def generate_rating(load_id: str, now: datetime) -> dict:
    rating = {
        "rating": random.choice([5, 5, 4, 3, None]),
        "customerName": random.choice(CUSTOMERS)[0],
        "loadId": load_id,
        "createdAt": _millis(now - timedelta(days=random.randint(0, 30))),
    }
    comment = random.choice(COMMENTS)
    if comment is not None:
        rating["comment"] = comment
    return rating


def generate_dataset(drivers: list[dict], loads_per_driver: int, seed: int) -> dict:
    random.seed(seed)
    now = datetime.now(timezone.utc)
    deliveries: dict = {}
    tickets: dict = {}
    ratings: dict = {}

    counter = 1
    for driver in drivers:
        for index in range(loads_per_driver):
            load_id = f"load{counter:05d}"
            counter += 1
            deliveries[load_id] = generate_delivery(index, driver, now)
            if random.random() < 0.7:
                tickets.setdefault(driver["uid"], {})[f"ticket_{load_id}"] = generate_ticket(load_id, now)
            if random.random() < 0.5:
                ratings.setdefault(driver["uid"], {})[f"rating_{load_id}"] = generate_rating(load_id, now)

    # Unassigned and foreign deliveries that must never match
    deliveries[f"load{counter:05d}"] = {"status": "pending", "details": {"customerName": "Walk-in"}}
    deliveries[f"load{counter + 1:05d}"] = {
        "status": "assigned",
        "details": {"assignedDriverEmail": "someone.else@example.com", "assignedDriverId": "not-a-driver"},
    }

    return {"deliveries": deliveries, "scaleTickets": tickets, "ratings": ratings}


def parse_driver(value: str) -> dict:
    uid, sep, email = value.partition(":")
    if not sep or not uid or not email:
        raise argparse.ArgumentTypeError("expected UID:EMAIL")
    return {"uid": uid.strip(), "email": email.strip()}


def main():
    parser = argparse.ArgumentParser(description="Generate sample Realtime Database data")
    parser.add_argument(
        "--driver",
        dest="drivers",
        type=parse_driver,
        action="append",
        help="Driver as UID:EMAIL (repeatable)",
    )
    parser.add_argument("--loads", type=int, default=8, help="Deliveries per driver")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(__file__).parent / "rtdb_sample.json",
    )
    args = parser.parse_args()

    drivers = args.drivers or [
        {"uid": "demoDriver001", "email": "dana.driver@example.com"},
        {"uid": "demoDriver002", "email": "Luis.Ortega@example.com"},
    ]
    dataset = generate_dataset(drivers, max(1, args.loads), args.seed)

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(json.dumps(dataset, indent=2), encoding="utf-8")
    print(
        f"Wrote {len(dataset['deliveries'])} deliveries, "
        f"{sum(len(v) for v in dataset['scaleTickets'].values())} tickets, "
        f"{sum(len(v) for v in dataset['ratings'].values())} ratings -> {args.output}"
    )


if __name__ == "__main__":
    main()
