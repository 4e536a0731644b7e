"""Validation playbook authoring service and client."""
