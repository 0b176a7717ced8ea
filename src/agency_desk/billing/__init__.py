"""
Billing.

Components:
- invoice_models.py: Invoice / InvoiceItem / InvoiceDraft, status values and totals
- invoice_store.py: access over the "invoices" document collection
- invoice_api.py: result-shaped create / edit / status actions
"""
