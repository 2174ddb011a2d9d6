"""
Transport clients.

real_http/ posts to the Paybox platforms with httpx; mocks/ answers in memory.
The choice between them happens where the gateway is constructed.
"""
