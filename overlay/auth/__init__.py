"""
Authentication gating for presenting the diagnostics menu.

The host decides who may open the overlay; the overlay only needs a yes/no answer.
"""
