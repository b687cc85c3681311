# Services package init
"""
Mock Device Server - Response Generators
========================================

What:  The layer that turns a raw request body into a synthetic device answer.
How:   Validate required fields, raise ValidationError on the first violation,
       otherwise combine echoed input, fixed constants and fresh random values.

Service Inventory:
    - Synthesizer:          random numbers, money amounts, timestamps
    - DeviceService:        static device list
    - CashRegisterService:  work shift, receipts, non-fiscal print, X-report, totals
    - PosService:           payments, refunds, X/Z reports

No service reads anything another call wrote.
"""
