"""Message templates for run summaries."""

DIAGNOSTIC_HEADER = """
# Pod Diagnostic Analysis
"""

DIAGNOSTIC_STATUS = """
**Current Status:** {status}
"""

DIAGNOSTIC_ROOT_CAUSE = """
**Root Cause:** {root_cause}

**Recommendation:** {recommendation}
"""

DIAGNOSTIC_ISSUES = """
## Issues Found
{issues}
"""

DIAGNOSTIC_ISSUE = "{index}. [{severity}] [{category}] {message}"

DIAGNOSTIC_SUGGESTION = "   - Suggestion: {suggestion}"

DIAGNOSTIC_NEXT_STEPS = """
## Next Steps
{steps}
"""

TRAIL_HEADER = """
# Network Troubleshooting: {workflow}
"""

TRAIL_TARGET = "**Target:** pod `{pod}` in namespace `{namespace}`\n"

TRAIL_TARGET_GENERAL = "**Target:** general network troubleshooting\n"

TRAIL_STEP = """
{ordinal}. **{status}** - {description}
   - Command: `{command}`
   - Purpose: {purpose}"""

TRAIL_OUTPUT = "   - Output: {output}"

TRAIL_ERROR = "   - Error: {error}"

TRAIL_TALLY = """
**Summary:** {succeeded}/{total} steps completed successfully
"""

TRAIL_ALL_FAILED = """
**Summary:** All steps failed - check pod name, namespace, and permissions
"""

PLAN_HEADER = """
# Planned Steps: {workflow}
"""

PLAN_DRY_RUN = """
(Dry run: no commands were executed.)
"""
