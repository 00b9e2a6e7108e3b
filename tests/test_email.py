"""
Tests for passenger emails sent on booking review
"""
import pytest
from unittest.mock import patch

from skyway.models import Booking
from skyway.utils.email import EmailService


class TestEmailService:

    def test_without_mail_server_only_logs(self, app, customer, make_flight, make_booking):
        booking = make_booking(customer, make_flight(), 'Confirmed')

        with patch('skyway.utils.email.smtplib.SMTP') as mock_smtp:
            assert EmailService.send_status_update_email(booking, 'Pending') is False
            mock_smtp.assert_not_called()

    def test_sends_over_smtp(self, app, customer, make_flight, make_booking):
        app.config.update(MAIL_SERVER='smtp.example.com', MAIL_PORT=2525, MAIL_USE_TLS=False)
        booking = make_booking(customer, make_flight(), 'Declined', decline_reason='Card rejected')

        with patch('skyway.utils.email.smtplib.SMTP') as mock_smtp:
            assert EmailService.send_status_update_email(booking, 'Pending Payment') is True

        mock_smtp.assert_called_once_with('smtp.example.com', 2525, timeout=10)
        smtp = mock_smtp.return_value.__enter__.return_value
        smtp.starttls.assert_not_called()
        message = smtp.send_message.call_args[0][0]
        assert message['To'] == 'alice@example.com'
        assert message['Subject'] == 'Booking Status Update - Flight PAR to TYO'
        body = message.get_content()
        assert 'New Status: Declined' in body
        assert 'Reason: Card rejected' in body

    def test_payment_confirmation_attaches_receipt(self, app, customer, make_flight, make_booking):
        app.config.update(MAIL_SERVER='smtp.example.com')
        booking = make_booking(customer, make_flight(), 'Paid')

        with patch('skyway.utils.email.smtplib.SMTP') as mock_smtp:
            EmailService.send_payment_confirmation_email(booking, b'%PDF-1.4 test', 'receipt.pdf')

        message = mock_smtp.return_value.__enter__.return_value.send_message.call_args[0][0]
        attachments = list(message.iter_attachments())
        assert [a.get_filename() for a in attachments] == ['receipt.pdf']
        assert attachments[0].get_content_type() == 'application/pdf'


class TestStatusChangeEmails:

    def update(self, client, headers, booking, status):
        return client.put(
            f'/api/admin/bookings/{booking.id}/status',
            json={'status': status},
            headers=headers
        )

    def test_paid_sends_confirmation_with_receipt(self, client, admin_headers, customer, make_flight, make_booking, db):
        booking = make_booking(customer, make_flight(), 'Pending Payment')

        with patch.object(EmailService, 'send_payment_confirmation_email') as mock_send:
            response = self.update(client, admin_headers, booking, 'Paid')

        assert response.status_code == 200
        sent_booking, pdf, filename = mock_send.call_args[0]
        assert sent_booking.id == booking.id
        assert pdf.startswith(b'%PDF')
        assert filename == f'Skyway_Receipt_{booking.id}.pdf'

        db.session.expire_all()
        assert db.session.get(Booking, booking.id).receipt_issued_at is not None

    def test_other_status_sends_update(self, client, admin_headers, customer, make_flight, make_booking):
        booking = make_booking(customer, make_flight(), 'Pending')

        with patch.object(EmailService, 'send_status_update_email') as mock_send:
            self.update(client, admin_headers, booking, 'Confirmed')

        assert mock_send.call_args[0][1] == 'Pending'

    def test_unchanged_status_sends_nothing(self, client, admin_headers, customer, make_flight, make_booking):
        booking = make_booking(customer, make_flight(), 'Confirmed')

        with patch.object(EmailService, 'send_status_update_email') as mock_send:
            self.update(client, admin_headers, booking, 'Confirmed')

        mock_send.assert_not_called()

    def test_email_failure_does_not_fail_the_update(self, client, admin_headers, customer, make_flight, make_booking, db):
        booking = make_booking(customer, make_flight(), 'Pending')

        with patch.object(EmailService, 'send_status_update_email', side_effect=OSError('connection refused')):
            response = self.update(client, admin_headers, booking, 'Declined')

        assert response.status_code == 200
        db.session.expire_all()
        assert db.session.get(Booking, booking.id).status == 'Declined'
