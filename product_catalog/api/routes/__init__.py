"""HTTP routes: the public root endpoints and the authenticated catalog router."""
