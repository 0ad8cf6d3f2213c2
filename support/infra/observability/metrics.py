from prometheus_client import Counter


tickets_created_total = Counter("support_tickets_created_total", "Support tickets opened", ["type"])
ticket_emails_failed_total = Counter("support_ticket_emails_failed_total", "Acknowledgement emails that failed")
