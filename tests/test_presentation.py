"""Tests for display formatting, stat cards and the confirmation dialog."""

from __future__ import annotations

from app.modules.dashboard.presentation import (
    format_date, format_price, record_row, stat_cards, user_row, verification_row
)
from app.modules.dashboard.schemas import AdminStats
from app.modules.moderation.dialogs import ConfirmationDialog, document_images
from app.modules.moderation.schemas import DialogType


def test_format_price_thresholds() -> None:
    assert format_price(25000000) == "₹2.50 Cr"
    assert format_price(10000000) == "₹1.00 Cr"
    assert format_price(550000) == "₹5.5 Lakh"
    assert format_price(100000) == "₹1.0 Lakh"
    assert format_price(99999) == "₹99,999"
    assert format_price(0) == "₹0"


def test_format_date() -> None:
    assert format_date("2024-01-05T10:00:00Z") == "5 Jan 2024"
    assert format_date(None) == ""


def test_stat_cards(loaded_state) -> None:
    cards = {card.key: card for card in stat_cards(loaded_state.stats)}

    assert cards["total_users"].value == "3"
    assert cards["total_users"].detail == "1 verified"
    assert cards["pending_verifications"].value == "2"
    assert cards["total_value"].value == "₹22.5 Lakh"


def test_stat_cards_on_empty_stats() -> None:
    cards = stat_cards(AdminStats())

    assert [card.label for card in cards] == [
        "Total Users", "Total Cars", "Pending Verifications", "Total Value"
    ]


def test_user_rows(loaded_state) -> None:
    john = user_row(loaded_state.find_user("u1"))
    assert john.display_name == "John Doe"
    assert john.initial == "J"
    assert john.status_label == "Unverified"
    assert john.actions == ["verify", "delete"]
    assert john.created == "3 Jan 2024"

    mike = user_row(loaded_state.find_user("u3"))
    assert mike.display_name == "No Name"
    assert mike.initial == "M"

    assert user_row(loaded_state.find_user("u2")).actions == ["unverify", "delete"]


def test_user_row_car_count(loaded_state) -> None:
    counts = {"u1": 1, "u2": 1, "ghost": 1}

    assert record_row(loaded_state.find_user("u1"), counts).car_count == 1
    assert record_row(loaded_state.find_user("u3"), counts).car_count == 0
    assert record_row(loaded_state.find_user("u3")).car_count == 0
    assert not hasattr(record_row(loaded_state.find_request("r1"), counts), "car_count")


def test_verification_rows(loaded_state) -> None:
    pending = verification_row(loaded_state.find_request("r1"))
    assert pending.status_label == "Pending"
    assert pending.owner_name == "John Doe"
    assert pending.actions == ["approve", "reject", "view_documents"]

    approved = verification_row(loaded_state.find_request("r2"))
    assert approved.actions == ["view_documents"]

    orphan = record_row(loaded_state.find_request("r3"))
    assert orphan.owner_name == "Unknown User"
    assert orphan.owner_email is None


def test_reject_dialog_lifecycle(loaded_state) -> None:
    dialog = ConfirmationDialog()
    assert not dialog.state().show

    dialog.open_reject_verification(loaded_state.find_request("r1"))
    dialog.set_input("Document expired")
    state = dialog.state()
    assert state.show
    assert state.type == DialogType.REJECT_VERIFICATION
    assert state.title == "Reject Verification"
    assert state.message == "Are you sure you want to reject verification for John Doe?"
    assert state.accepts_input
    assert state.input_value == "Document expired"

    dialog.close()
    assert dialog.state().model_dump() == ConfirmationDialog().state().model_dump()


def test_delete_dialog_has_no_input(loaded_state) -> None:
    dialog = ConfirmationDialog()
    dialog.open_delete_user(loaded_state.find_user("u3"))

    state = dialog.state()
    assert state.type == DialogType.DELETE_USER
    assert state.target_id == "u3"
    assert "mike@example.com" in state.message
    assert not state.accepts_input


def test_document_images(loaded_state) -> None:
    images = document_images(loaded_state.find_request("r1"))

    assert images.front_image_url == "https://img.test/r1/front.jpg"
    assert images.back_image_url == "https://img.test/r1/back.jpg"
