"""Tests for EmailMessage -> Graph sendMail payload mapping."""

import base64
import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from graph_mail.mail.mapping import (
    build_payload,
    filter_empty,
    importance_for_priority,
    to_attachment_collection,
    to_recipient_collection,
)
from graph_mail.models import Address, DataPart, EmailMessage, TextPart


def _recipient(address: str, name: str | None = None) -> dict:
    return {"emailAddress": {"name": name, "address": address}}


class TestRecipientCollection(unittest.TestCase):
    """Tests for to_recipient_collection."""

    def test_empty_input_gives_empty_list(self):
        """None and empty sequences map to [] rather than None."""
        self.assertEqual(to_recipient_collection(None), [])
        self.assertEqual(to_recipient_collection([]), [])

    def test_bare_address_has_null_name(self):
        """A bare address string, resolved by EmailMessage, maps to one recipient with name None."""
        message = EmailMessage(from_="a@x.com", to="b@x.com")
        self.assertEqual(to_recipient_collection(message.to), [_recipient("b@x.com")])
        self.assertEqual(to_recipient_collection(message.from_), [_recipient("a@x.com")])

    def test_sequence_preserves_order_and_names(self):
        """n addresses give n recipients in the same order, names verbatim."""
        addresses = [
            Address(address="c@x.com", name="Carol"),
            Address(address="a@x.com"),
            Address(address="b@x.com", name=""),
        ]
        self.assertEqual(
            to_recipient_collection(addresses),
            [
                _recipient("c@x.com", "Carol"),
                _recipient("a@x.com"),
                _recipient("b@x.com", ""),
            ],
        )


class TestAttachmentCollection(unittest.TestCase):
    """Tests for to_attachment_collection."""

    def test_data_parts_are_encoded(self):
        """contentBytes round-trips to the raw body and size is the raw length."""
        raw = b"\x00\x01binary\xff" * 10
        part = DataPart(body=raw, filename="blob.bin", content_type="application/octet-stream")
        [attachment] = to_attachment_collection([part])
        self.assertEqual(attachment["@odata.type"], "#microsoft.graph.fileAttachment")
        self.assertEqual(attachment["name"], "blob.bin")
        self.assertEqual(attachment["contentType"], "application/octet-stream")
        self.assertEqual(attachment["size"], len(raw))
        self.assertEqual(base64.b64decode(attachment["contentBytes"]), raw)

    def test_non_data_parts_skipped_order_kept(self):
        """Text parts are dropped; remaining data parts keep their order."""
        parts = [
            DataPart(body=b"one", filename="1.txt", content_type="text/plain"),
            TextPart(text="inline note"),
            DataPart(body=b"%PDF-1.4", filename="2.pdf", content_type="application/pdf"),
        ]
        names = [a["name"] for a in to_attachment_collection(parts)]
        self.assertEqual(names, ["1.txt", "2.pdf"])

    def test_no_parts(self):
        self.assertEqual(to_attachment_collection([]), [])


class TestImportance(unittest.TestCase):
    """Priority 1..5 collapses into three importance buckets."""

    def test_buckets(self):
        expected = {1: "Low", 2: "Low", 3: "Normal", 4: "High", 5: "High"}
        for priority, importance in expected.items():
            with self.subTest(priority=priority):
                self.assertEqual(importance_for_priority(priority), importance)


class TestFilterEmpty(unittest.TestCase):
    def test_drops_falsy_values(self):
        payload = {"a": "x", "b": "", "c": None, "d": [], "e": {}, "f": False, "g": [1]}
        self.assertEqual(filter_empty(payload), {"a": "x", "g": [1]})


class TestBuildPayload(unittest.TestCase):
    """Tests for build_payload."""

    def test_minimal_text_message(self):
        """Plain message yields exactly the expected keys, no empty collections."""
        message = EmailMessage(
            subject="Hi",
            from_="a@x.com",
            to=["b@x.com"],
            text_body="Hello",
            priority=3,
        )
        sender = _recipient("a@x.com")
        self.assertEqual(
            build_payload(message),
            {
                "subject": "Hi",
                "sender": sender,
                "from": sender,
                "toRecipients": [_recipient("b@x.com")],
                "importance": "Normal",
                "body": {"contentType": "text", "content": "Hello"},
            },
        )

    def test_no_cc_means_no_key(self):
        """Empty recipient lists and attachments are omitted, not sent as []."""
        payload = build_payload(EmailMessage(from_="a@x.com", to=["b@x.com"], text_body="x"))
        for key in ("ccRecipients", "bccRecipients", "replyTo", "attachments", "subject"):
            self.assertNotIn(key, payload)

    def test_html_body_wins(self):
        """Non-empty html_body is used even when text_body is present."""
        message = EmailMessage(from_="a@x.com", html_body="<p>Hi</p>", text_body="Hi")
        self.assertEqual(build_payload(message)["body"], {"contentType": "html", "content": "<p>Hi</p>"})

    def test_empty_html_falls_back_to_text(self):
        message = EmailMessage(from_="a@x.com", html_body="", text_body="plain")
        self.assertEqual(build_payload(message)["body"], {"contentType": "text", "content": "plain"})

    def test_only_first_from_is_used(self):
        """sender and from both take the first from address."""
        message = EmailMessage(
            from_=[Address(address="first@x.com", name="First"), Address(address="second@x.com")],
            to=["b@x.com"],
        )
        payload = build_payload(message)
        self.assertEqual(payload["from"], _recipient("first@x.com", "First"))
        self.assertEqual(payload["sender"], payload["from"])

    def test_full_message(self):
        """All recipient kinds, priority and attachments are mapped."""
        message = EmailMessage(
            subject="Report",
            from_=Address(address="ops@x.com", name="Ops"),
            reply_to=["noreply@x.com"],
            to=[Address(address="b@x.com", name="Bob")],
            cc=["c@x.com"],
            bcc=["d@x.com"],
            priority=1,
            text_body="see attached",
            attachments=[DataPart(body=b"a,b\n1,2\n", filename="r.csv", content_type="text/csv")],
        )
        payload = build_payload(message)
        self.assertEqual(payload["replyTo"], [_recipient("noreply@x.com")])
        self.assertEqual(payload["toRecipients"], [_recipient("b@x.com", "Bob")])
        self.assertEqual(payload["ccRecipients"], [_recipient("c@x.com")])
        self.assertEqual(payload["bccRecipients"], [_recipient("d@x.com")])
        self.assertEqual(payload["importance"], "Low")
        self.assertEqual(payload["attachments"][0]["size"], 8)


if __name__ == "__main__":
    unittest.main()
