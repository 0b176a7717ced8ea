"""
Client records.

Components:
- client_models.py: Client / ContractedService + timestamp schemas
- client_store.py: access over the "clients" document collection
- client_api.py: result-shaped add / update / delete / profile-icon actions
"""
