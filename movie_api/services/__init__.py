"""
Outbound services: the box-office provider client and background enrichment.
"""
