"""
Tests for the contact form endpoint and its queue consumer.
"""
import smtplib
from unittest.mock import patch, MagicMock

import pytest
import redis
from celery.exceptions import Retry
from django.core import mail
from rest_framework import status

from contact.emails import classify_intent, format_timestamp, build_contact_email
from contact.tasks import deliver_contact_message, DELIVERED_KEY

CONTACT_URL = '/api/contact'


@pytest.fixture
def valid_data():
    return {
        'name': 'Jane Recruiter',
        'email': 'jane@example.com',
        'subject': 'Hello',
        'message': 'We have a job opening that fits your background.',
    }


@pytest.fixture
def queued():
    """Capture publishes to the contact queue."""
    with patch('contact.views.deliver_contact_message') as task:
        yield task.delay


@pytest.fixture
def sample_payload():
    return {
        'id': '0b7a4a52-7a7e-4b44-9a53-3c3b1f0f8a11',
        'name': 'Jane Recruiter',
        'email': 'jane@example.com',
        'subject': 'Hello',
        'message': 'Are you open to a new career move?',
        'timestamp': '2025-03-04T14:15:00+00:00',
        'source': 'modal',
        'ip': '203.0.113.5',
        'userAgent': 'pytest',
        'referrer': 'https://suwityarat.me/about',
        'url': 'http://testserver/api/contact',
    }


class TestContactFormSubmission:
    """Test public contact form submission."""

    def test_submit_valid_contact_form(self, api_client, valid_data, queued):
        response = api_client.post(CONTACT_URL, valid_data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['success'] is True
        assert response.data['message']
        queued.assert_called_once()

    def test_payload_carries_request_metadata(self, api_client, valid_data, queued):
        api_client.post(
            CONTACT_URL,
            valid_data,
            format='json',
            HTTP_X_FORWARDED_FOR='203.0.113.5, 10.0.0.1',
            HTTP_USER_AGENT='Mozilla/5.0 (pytest)',
            HTTP_REFERER='https://suwityarat.me/contact',
        )

        payload = queued.call_args.args[0]
        assert payload['ip'] == '203.0.113.5'
        assert payload['userAgent'] == 'Mozilla/5.0 (pytest)'
        assert payload['referrer'] == 'https://suwityarat.me/contact'
        assert payload['url'] == 'http://testserver/api/contact'
        assert payload['source'] == 'modal'
        assert payload['id']
        assert payload['timestamp']

    def test_missing_headers_default_to_unknown(self, api_client, valid_data, queued):
        api_client.post(CONTACT_URL, valid_data, format='json')

        payload = queued.call_args.args[0]
        assert payload['referrer'] == 'unknown'
        assert payload['ip'] == '127.0.0.1'

    @pytest.mark.parametrize('missing', ['name', 'email', 'message'])
    def test_submit_missing_required_field(self, api_client, valid_data, queued, missing):
        del valid_data[missing]

        response = api_client.post(CONTACT_URL, valid_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert response.data['error'] == "Name, email, and message are required"
        queued.assert_not_called()

    @pytest.mark.parametrize('field', ['name', 'email', 'message'])
    def test_submit_blank_required_field(self, api_client, valid_data, queued, field):
        valid_data[field] = '   '

        response = api_client.post(CONTACT_URL, valid_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        queued.assert_not_called()

    @pytest.mark.parametrize('email', ['invalid-email', 'user@domain', 'user@', '@example.com', 'a b@example.com'])
    def test_submit_invalid_email(self, api_client, valid_data, queued, email):
        valid_data['email'] = email

        response = api_client.post(CONTACT_URL, valid_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == "Invalid email format"
        queued.assert_not_called()

    def test_long_message_is_truncated(self, api_client, valid_data, queued):
        valid_data['message'] = 'x' * 5000

        response = api_client.post(CONTACT_URL, valid_data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(queued.call_args.args[0]['message']) == 2000

    def test_name_and_subject_are_truncated(self, api_client, valid_data, queued):
        valid_data['name'] = 'n' * 150
        valid_data['subject'] = 's' * 300

        api_client.post(CONTACT_URL, valid_data, format='json')

        payload = queued.call_args.args[0]
        assert len(payload['name']) == 100
        assert len(payload['subject']) == 200

    def test_fields_are_trimmed_and_email_lowercased(self, api_client, valid_data, queued):
        valid_data['name'] = '  Jane  '
        valid_data['email'] = '  Jane@Example.COM '

        api_client.post(CONTACT_URL, valid_data, format='json')

        payload = queued.call_args.args[0]
        assert payload['name'] == 'Jane'
        assert payload['email'] == 'jane@example.com'

    @pytest.mark.parametrize('subject', [None, '', '   '])
    def test_subject_defaults_when_empty(self, api_client, valid_data, queued, subject):
        valid_data['subject'] = subject

        api_client.post(CONTACT_URL, valid_data, format='json')

        assert queued.call_args.args[0]['subject'] == 'Contact Form Submission'

    def test_subject_defaults_when_omitted(self, api_client, valid_data, queued):
        del valid_data['subject']

        api_client.post(CONTACT_URL, valid_data, format='json')

        assert queued.call_args.args[0]['subject'] == 'Contact Form Submission'

    def test_page_source_tag(self, api_client, valid_data, queued):
        valid_data['source'] = 'page'

        api_client.post(CONTACT_URL, valid_data, format='json')

        assert queued.call_args.args[0]['source'] == 'page'

    def test_unknown_source_tag_rejected(self, api_client, valid_data, queued):
        valid_data['source'] = 'popup'

        response = api_client.post(CONTACT_URL, valid_data, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        queued.assert_not_called()

    def test_malformed_json_is_processing_error(self, api_client, queued):
        response = api_client.post(CONTACT_URL, data='{"name": ', content_type='application/json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['error'] == "Failed to process contact form"
        queued.assert_not_called()

    def test_enqueue_failure_is_processing_error(self, api_client, valid_data, queued):
        queued.side_effect = ConnectionError("broker unavailable")

        response = api_client.post(CONTACT_URL, valid_data, format='json')

        assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
        assert response.data['success'] is False
        queued.assert_called_once()

    def test_submission_is_emailed_end_to_end(self, api_client, valid_data, redis_client):
        """With eager Celery the queued task sends the email in-process."""
        response = api_client.post(CONTACT_URL, valid_data, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert len(mail.outbox) == 1
        assert mail.outbox[0].reply_to == ['jane@example.com']


class TestContactEmail:
    """Test email rendering."""

    def test_email_is_multipart_with_message_id(self, sample_payload, settings):
        email = build_contact_email(sample_payload)

        assert email.to == [settings.CONTACT_EMAIL_TO]
        assert email.from_email == settings.CONTACT_EMAIL_FROM
        assert email.reply_to == ['jane@example.com']
        assert email.extra_headers['Message-ID'].endswith(f"@{settings.CONTACT_EMAIL_DOMAIN}>")
        assert email.alternatives[0][1] == 'text/html'

        message = email.message()
        message.as_bytes()  # boundary is generated when the message is flattened
        assert message.is_multipart()
        assert message.get_content_type() == 'multipart/alternative'
        assert message.get_boundary()

    def test_bodies_include_contact_details(self, sample_payload):
        email = build_contact_email(sample_payload)

        assert 'From: Jane Recruiter' in email.body
        assert 'Email: jane@example.com' in email.body
        assert 'Source: Website Modal' in email.body
        assert 'Intent: Job Opportunity' in email.body
        assert 'Are you open to a new career move?' in email.body
        assert 'Jane Recruiter' in email.alternatives[0][0]

    def test_subject_is_labelled_with_intent(self, sample_payload):
        email = build_contact_email(sample_payload)

        assert email.subject.startswith('[Job Opportunity] Hello')

    def test_html_body_escapes_markup(self, sample_payload):
        sample_payload['message'] = '<script>alert(1)</script>'

        email = build_contact_email(sample_payload)

        assert '<script>' not in email.alternatives[0][0]
        assert '<script>alert(1)</script>' in email.body

    def test_subject_newlines_are_stripped(self, sample_payload):
        sample_payload['subject'] = 'Hi\r\nBcc: victim@example.com'

        email = build_contact_email(sample_payload)

        assert '\n' not in email.subject
        assert '\r' not in email.subject

    @pytest.mark.parametrize('message,intent', [
        ('We have a job opening for you', 'Job Opportunity'),
        ('Interested in a career at our company?', 'Job Opportunity'),
        ('I need a quote for a freelance website', 'Project Inquiry'),
        ('Would you like to collaborate on an open source tool?', 'Collaboration'),
        ('Quick question about your ITSM post', 'Question'),
        ('Just saying hi!', 'General Inquiry'),
        ('', 'General Inquiry'),
    ])
    def test_classify_intent(self, message, intent):
        assert classify_intent(message) == intent

    def test_format_timestamp_uses_owner_timezone(self, settings):
        settings.CONTACT_EMAIL_TIMEZONE = 'America/New_York'

        assert format_timestamp('2025-03-04T14:15:00+00:00') == 'March 4, 2025 at 09:15 AM'

    def test_format_timestamp_passes_through_garbage(self):
        assert format_timestamp('not-a-date') == 'not-a-date'


class TestContactQueueConsumer:
    """Test the Celery task that sends queued contact messages."""

    def test_successful_send_is_acknowledged(self, sample_payload, redis_client):
        result = deliver_contact_message(sample_payload)

        assert result['status'] == 'sent'
        assert result['message_id']
        assert len(mail.outbox) == 1
        assert redis_client.exists(DELIVERED_KEY.format(sample_payload['id']))

    def test_failed_send_is_retried_not_acknowledged(self, sample_payload, redis_client):
        email = MagicMock()
        email.send.side_effect = smtplib.SMTPException("relay refused")

        with patch('contact.tasks.build_contact_email', return_value=email), \
                patch.object(deliver_contact_message, 'retry', side_effect=Retry()) as retry:
            with pytest.raises(Retry):
                deliver_contact_message(sample_payload)

        retry.assert_called_once()
        assert retry.call_args.kwargs['exc'] is email.send.side_effect
        assert retry.call_args.kwargs['countdown'] == 60
        assert not redis_client.exists(DELIVERED_KEY.format(sample_payload['id']))

    def test_formatting_failure_is_retried(self, sample_payload, redis_client):
        del sample_payload['email']

        with patch.object(deliver_contact_message, 'retry', side_effect=Retry()) as retry:
            with pytest.raises(Retry):
                deliver_contact_message(sample_payload)

        retry.assert_called_once()
        assert len(mail.outbox) == 0

    def test_redelivered_message_is_not_sent_twice(self, sample_payload, redis_client):
        first = deliver_contact_message(sample_payload)
        second = deliver_contact_message(sample_payload)

        assert first['status'] == 'sent'
        assert second['status'] == 'duplicate'
        assert len(mail.outbox) == 1

    def test_store_outage_does_not_block_sending(self, sample_payload, monkeypatch):
        def unavailable():
            raise redis.ConnectionError("kv down")

        monkeypatch.setattr('core.kv.get_redis_client', unavailable)

        result = deliver_contact_message(sample_payload)

        assert result['status'] == 'sent'
        assert len(mail.outbox) == 1

    def test_each_message_is_independent(self, sample_payload, redis_client):
        other = {**sample_payload, 'id': 'f3c8d1e2-0000-4000-8000-000000000000'}
        failing = MagicMock()
        failing.send.side_effect = smtplib.SMTPException("boom")

        with patch('contact.tasks.build_contact_email', return_value=failing), \
                patch.object(deliver_contact_message, 'retry', side_effect=Retry()):
            with pytest.raises(Retry):
                deliver_contact_message(sample_payload)

        result = deliver_contact_message(other)

        assert result['status'] == 'sent'
        assert len(mail.outbox) == 1
