from __future__ import annotations

from typing import Any

# Bundled sample catalog, in the same record shape as the backend documents.
SAMPLE_CATALOG: dict[str, list[dict[str, Any]]] = {
    "branches": [
        {
            "id": "b1",
            "name": "Main",
            "address": "123 St",
            "city": "Metro",
            "hours": "Mon-Sat 08:00-20:00",
            "isActive": True,
        },
        {
            "id": "b2",
            "name": "Riverside",
            "address": "45 River Rd",
            "city": "Metro",
            "hours": "Tue-Sun 10:00-19:00",
            "isActive": True,
        },
        {
            "id": "b3",
            "name": "Old Town",
            "address": "9 Market Sq",
            "city": "Oldport",
            "hours": None,
            "isActive": False,
        },
    ],
    "services": [
        {
            "id": "s1",
            "name": "Haircut",
            "price": 500,
            "duration": 30,
            "category": "Haircut",
            "description": "Wash, cut and blow dry.",
            "branchId": "b1",
        },
        {
            "id": "s2",
            "name": "Hair Color",
            "price": 1500,
            "duration": 90,
            "category": "Color",
            "description": "Full color with toner.",
            "isChemical": True,
            "branchId": "b1",
        },
        {
            "id": "s3",
            "name": "Manicure",
            "price": 350,
            "duration": 45,
            "category": "Nails",
            "branchId": "b1",
        },
        {
            "id": "s4",
            "name": "Keratin Treatment",
            "price": 2500,
            "duration": 120,
            "category": "Treatment",
            "isChemical": True,
            "isActive": False,
            "branchId": "b1",
        },
        {
            "id": "s5",
            "name": "Haircut",
            "price": 450,
            "duration": 30,
            "category": "Haircut",
            "branchId": "b2",
        },
    ],
    "stylists": [
        {
            "id": "st1",
            "name": "Jane",
            "firstName": "Jane",
            "lastName": "Doe",
            "role": "stylist",
            "staffData": {"branchId": "b1", "skills": ["s1", "s2"], "rating": 4.8},
        },
        {
            "id": "st2",
            "name": "Maria",
            "firstName": "Maria",
            "lastName": "Santos",
            "role": "stylist",
            "staffData": {"branchId": "b1", "skills": ["s1", "s3"], "rating": 4.6},
        },
        {
            "id": "st3",
            "name": "Leo",
            "firstName": "Leo",
            "lastName": "Cruz",
            "role": "stylist",
            "isAvailable": False,
            "staffData": {"branchId": "b1", "skills": ["s2"], "rating": 4.2},
        },
        {
            "id": "st4",
            "name": "Ana",
            "firstName": "Ana",
            "lastName": "Reyes",
            "role": "stylist",
            "staffData": {"branchId": "b2", "skills": ["s5"]},
        },
    ],
}
