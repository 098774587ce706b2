"""
Clients App - Loyalty Client Directory

Registers loyalty clients, keeps their contact data and the three benefits
each one picked at sign-up, and answers the lookups the purchase desk needs
(by id, by tax id, by name, by free-text search).

Architecture:
- Models: Client, Benefit
- Services: client_management, client_search
- Views: ClientViewSet
"""
