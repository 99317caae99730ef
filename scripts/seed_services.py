#!/usr/bin/env python3
"""Seed the service store with sample services.

Usage:
    PYTHONPATH=. python scripts/seed_services.py [--force]
"""
import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.zoo_product_form.config import Settings
from src.zoo_product_form.store.services import ServiceStore


SAMPLE_SERVICES = [
    {
        "title": "Veterinary check-up",
        "description": "Health diagnostics, vaccination and consultation.",
        "image_url": "https://images.unsplash.com/photo-1628009368231-7bb7cfcb0def?auto=format&fit=crop&w=800",
    },
    {
        "title": "Dog grooming",
        "description": "Full care package: haircut, bath, ear cleaning.",
        "image_url": "https://images.unsplash.com/photo-1516734212186-a967f81ad0d7?auto=format&fit=crop&w=800",
    },
    {
        "title": "Obedience training",
        "description": "Obedience course for puppies and adult dogs.",
        "image_url": "https://images.unsplash.com/photo-1587300003388-59208cc962cb?auto=format&fit=crop&w=800",
    },
    {
        "title": "Aquarium cleaning",
        "description": "Aquarium system maintenance and water changes.",
        "image_url": "https://images.unsplash.com/photo-1522069169874-c58ec4b76be5?auto=format&fit=crop&w=800",
    },
    {
        "title": "Pet hotel 5*",
        "description": "Comfortable stay with 24/7 video monitoring.",
        "image_url": "https://images.unsplash.com/photo-1601758228041-f3b2795255f1?auto=format&fit=crop&w=800",
    },
    {
        "title": "Pet photo session",
        "description": "Studio shoot, 10 retouched photos.",
        "image_url": "https://images.unsplash.com/photo-1548199973-03cce0bbc87b?auto=format&fit=crop&w=800",
    },
]


def seed_services(store: ServiceStore, force: bool = False) -> int:
    """Insert SAMPLE_SERVICES, clearing existing rows first when force is set."""
    existing = store.count()
    if existing and not force:
        print(f"Store already holds {existing} services, skipping (use --force)")
        return 0

    if force:
        for service in store.list():
            store.delete(service.id)

    for sample in SAMPLE_SERVICES:
        store.create(**sample)

    print(f"Seeded {len(SAMPLE_SERVICES)} services")
    return len(SAMPLE_SERVICES)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed sample services")
    parser.add_argument("--force", action="store_true", help="Delete existing services first")
    args = parser.parse_args()

    seed_services(ServiceStore(Settings.from_env().db_path), force=args.force)
