"""Fallback dataset shown when the live sheets cannot be reached."""

from __future__ import annotations

from typing import Any, Dict, List

from core.config import (
    OFFLINE_10D_SHEET,
    OFFLINE_24H_SHEET,
    OFFLINE_5D_SHEET,
    ONLINE_SHOWING_OFFLINE_SHEET,
    SOLD_PENDING_SHEET,
    UNRESOLVED_20D_SHEET,
)


def demo_vehicle_sheets() -> Dict[str, Dict[str, Any]]:
    offline_headers = ["Vehicle Number", "Client", "Location", "Offline Since (hrs)"]
    return {
        OFFLINE_24H_SHEET: {
            "headers": offline_headers,
            "data": [
                {"Vehicle Number": "MH01AB1234", "Client": "Test Client 1", "Location": "Mumbai", "Offline Since (hrs)": "25"},
                {"Vehicle Number": "DL02CD5678", "Client": "Test Client 2", "Location": "Delhi", "Offline Since (hrs)": "30"},
            ],
        },
        OFFLINE_5D_SHEET: {
            "headers": offline_headers,
            "data": [
                {"Vehicle Number": "KA03EF9012", "Client": "Test Client 3", "Location": "Bangalore", "Offline Since (hrs)": "144"},
            ],
        },
        OFFLINE_10D_SHEET: {
            "headers": offline_headers,
            "data": [
                {"Vehicle Number": "TN04GH3456", "Client": "Test Client 4", "Location": "Chennai", "Offline Since (hrs)": "264"},
            ],
        },
        ONLINE_SHOWING_OFFLINE_SHEET: {
            "headers": ["Vehicle Number", "Client", "Location"],
            "data": [{"Vehicle Number": "UP05IJ7890", "Client": "Test Client 5", "Location": "Lucknow"}],
        },
        SOLD_PENDING_SHEET: {
            "headers": ["Vehicle Number", "Client", "Status"],
            "data": [{"Vehicle Number": "RJ06KL1234", "Client": "Test Client 6", "Status": "Camera Pending"}],
        },
        UNRESOLVED_20D_SHEET: {
            "headers": ["Issue ID", "Vehicle Number", "Client", "Issue", "Resolved Y/N"],
            "data": [
                {
                    "Issue ID": "ISS001",
                    "Vehicle Number": "GJ07MN5678",
                    "Client": "Test Client 7",
                    "Issue": "Camera not working",
                    "Resolved Y/N": "N",
                }
            ],
        },
    }


def demo_misalignment_rows() -> List[Dict[str, str]]:
    return [{"Date": "10/09/2025", "Client Name": "Test Client", "Vehicle Numbers": "TEST001, TEST002"}]


def demo_issue_rows() -> List[Dict[str, str]]:
    return [
        {
            "Issue ID": "ISS001",
            "Timestamp Issues Raised": "02/09/2025 10:15:00",
            "Client": "Test Client 1",
            "City": "Mumbai",
            "Vehicle Number": "MH01AB1234",
            "Issue": "Camera offline",
            "Assigned To": "Field Team",
            "Resolved Y/N": "N",
            "Next Follow Up Date": "12/09/2025",
        },
        {
            "Issue ID": "ISS002",
            "Timestamp Issues Raised": "15/08/2025 16:40:00",
            "Client": "Test Client 2",
            "City": "Delhi",
            "Vehicle Number": "DL02CD5678",
            "Issue": "Camera misaligned",
            "Assigned To": "Support",
            "Resolved Y/N": "Y",
            "Next Follow Up Date": "",
        },
        {
            "Issue ID": "ISS003",
            "Timestamp Issues Raised": "20/08/2025 09:05:00",
            "Client": "Test Client 2",
            "City": "Delhi",
            "Vehicle Number": "DL09XY4321",
            "Issue": "No video feed",
            "Assigned To": "",
            "Resolved Y/N": "",
            "Next Follow Up Date": "",
        },
    ]
