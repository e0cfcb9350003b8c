"""Shared fixtures for the analyzer test suite."""

import pytest

FULL_RESPONSE = """1. Document Type and Purpose:
   - Type: Employment Agreement (Full-Time)
   - Purpose: Defines the terms of employment

2. Parties Involved:
   - Acme Corp (Employer)
   - Jane Doe (Employee)

3. Important Dates:
   - Effective Date: January 1, 2024
   - Termination Date: December 31, 2025
   - Review Date

4. Payment Terms and Financial Details:
   - Payment Amount: $5,000 per month
   - Payment Schedule: Paid on the 1st of each month

5. Key Terms and Conditions:
   - Early termination allowed with 30 days notice
   - Confidentiality obligations survive the agreement
   - Non-compete for 12 months

6. Risk Assessment:
   - Risk Level: Medium
   - Risk Factors:
     - Broad non-compete scope
     - No severance terms
   - Concerning Elements:
     - Unilateral amendment rights

7. Missing or Unclear Elements:
   - Governing law is not specified

8. Completion Score:
   - Score: 0.8
   - Explanation: Most sections are complete

9. Plain English Summary:
   - Overview: Jane works for Acme for two years.
   - Key Rights: Monthly salary.
"""


@pytest.fixture
def full_response():
    """A well-formed nine-section model response."""
    return FULL_RESPONSE
