"""
Tuition inquiries module.

Scope:
- Public form submission
- Password-gated listing and triage (actioned flag)
- Bulk removal of actioned inquiries
"""
