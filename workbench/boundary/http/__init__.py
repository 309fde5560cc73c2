"""
Outbound HTTP clients: data source index, conversation API, OAuth
connections, transcript providers and email.

Dependencies: httpx
"""
