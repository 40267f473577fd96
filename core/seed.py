"""
Seed dataset used when nothing has been saved yet.
"""

from __future__ import annotations

from typing import Final, List

from core.models import LeasingEntry


SEED_ENTRIES: Final[tuple[dict, ...]] = (
    {
        "id": "1",
        "week": 23,
        "date": "2025-06-02T00:00:00.000Z",
        "tenantName": "Budi Santoso",
        "businessName": "Kopi Kenangan Senja",
        "businessType": "Cafe",
        "contact": "0812-3456-7890",
        "notes": "Interested in ground floor unit near main entrance.",
        "status": "Follow-up",
    },
    {
        "id": "2",
        "week": 23,
        "date": "2025-06-04T00:00:00.000Z",
        "tenantName": "Siti Rahayu",
        "businessName": "Batik Nusantara",
        "businessType": "Fashion Retail",
        "contact": "siti.rahayu@example.com",
        "notes": "Requested floor plan for 45 sqm units.",
        "status": "Proposal Sent",
    },
    {
        "id": "3",
        "week": 24,
        "date": "2025-06-10T00:00:00.000Z",
        "tenantName": "Andrew Tan",
        "businessName": "Gadget Hub",
        "businessType": "Electronics",
        "contact": "0813-2222-1111",
        "notes": "Negotiating service charge.",
        "status": "Negotiation",
    },
    {
        "id": "4",
        "week": 24,
        "date": "2025-06-12T00:00:00.000Z",
        "tenantName": "Maria Gonzales",
        "businessName": "Sweet Corner Bakery",
        "businessType": "F&B",
        "contact": "maria@sweetcorner.example",
        "notes": "",
        "status": "Site Visit",
    },
    {
        "id": "5",
        "week": 25,
        "date": "2025-06-17T00:00:00.000Z",
        "tenantName": "Rudi Hartono",
        "businessName": "FitZone Gym",
        "businessType": "Fitness",
        "contact": "0821-9876-5432",
        "notes": "Needs 300 sqm on upper floor.",
        "status": "Follow-up",
    },
    {
        "id": "6",
        "week": 25,
        "date": "2025-06-19T00:00:00.000Z",
        "tenantName": "Linda Wijaya",
        "businessName": "Optik Cemerlang",
        "businessType": "Optical",
        "contact": "linda.w@example.com",
        "notes": "Letter of intent signed.",
        "status": "LOI Signed",
    },
    {
        "id": "7",
        "week": 26,
        "date": "2025-06-24T00:00:00.000Z",
        "tenantName": "Kevin Pratama",
        "businessName": "Ramen Ichiban",
        "businessType": "F&B",
        "contact": "0856-1234-0000",
        "notes": "Awaiting landlord approval for exhaust works.",
        "status": "Pending Approval",
    },
    {
        "id": "8",
        "week": 26,
        "date": "2025-06-27T00:00:00.000Z",
        "tenantName": "Dewi Lestari",
        "businessName": "Bloom Florist",
        "businessType": "Florist",
        "contact": "dewi@bloom.example",
        "notes": "Kiosk option preferred.",
        "status": "Closed - Won",
    },
)


def initial_data() -> List[LeasingEntry]:
    """Build fresh entries from the seed dataset."""
    return [LeasingEntry.from_dict(item) for item in SEED_ENTRIES]
