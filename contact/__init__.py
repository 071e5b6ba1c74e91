"""
Contact App

Handles contact form submissions from the website:
- Public contact form submission (modal and contact page)
- Validation and sanitization of the submitted fields
- Queueing each submission for the email worker
- Email notification to the site owner, retried on failure
"""
