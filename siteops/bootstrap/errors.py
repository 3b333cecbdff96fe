"""
SiteOps Bootstrap - Errors
==========================
"""


class SystemBootstrapError(Exception):
    """
    A permission or approval table broke a policy law at load time.

    `invariant` names the law (MATRIX_TOTALITY, PMO_UNLIMITED, ...) and
    `detail` names the offending role, category or chain. Serving with
    the table anyway would mis-route approvals, so Django's ready()
    lets this propagate.
    """

    def __init__(self, invariant: str, detail: str):
        self.invariant = invariant
        self.detail = detail
        super().__init__(
            f"SITEOPS BOOTSTRAP FAILURE - {invariant}: {detail}"
        )
