"""
Purchases App - Loyalty Purchase Desk

This app records loyalty purchases and helps the operator negotiate them:
the typed amount is read as cents and shown in local currency, and clients
holding the product-discount benefit get a 3% to 8% price band with a
suggested price inside it.

Key Features:
- Append-only purchase ledger with denormalized client identity
- Amount input parsing and currency display
- Discount band and suggested price for eligible clients
- Registration workflow guarding against double submission
- Landing-page summary (today's total, average of the recent feed)

Architecture:
- Models: Purchase
- Services: currency, discounts, ledger, registration
- Views: PurchaseViewSet
- Exceptions: Domain exception hierarchy
"""
