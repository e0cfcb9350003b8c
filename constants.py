"""Constants and configuration values."""

# Section numbers of the nine-part analysis response
SECTION_TITLES = {
    1: "Document Type and Purpose",
    2: "Parties Involved",
    3: "Important Dates",
    4: "Payment Terms and Financial Details",
    5: "Key Terms and Conditions",
    6: "Risk Assessment",
    7: "Missing or Unclear Elements",
    8: "Completion Score",
    9: "Plain English Summary",
}

# Record defaults
DEFAULT_DOCUMENT_TYPE = "Document"
DEFAULT_RISK_LEVEL = "Medium"
DEFAULT_COMPLETION_SCORE = 0.5

# Renderers split payment terms back apart on this token
PAYMENT_TERMS_SEPARATOR = " || "

# Key terms containing any of these (lowercased) are termination clauses
TERMINATION_KEYWORDS = ("terminat", "cancel", "revoke", "end", "expiration")

# Risk level inference thresholds
HIGH_RISK_FACTOR_COUNT = 5
MEDIUM_RISK_FACTOR_COUNT = 2
CONCERNING_POINTS_ESCALATION = 3

# Completion score fallback. The prompt asks for more fields than the six
# that are cheap to check, so the denominator is larger than the count.
COMPLETION_EXPECTED_FIELDS = 8
MISSING_CLAUSE_PENALTY = 0.1

# Prompt templates
ANALYSIS_PROMPT_TEMPLATE = """You are a legal document analyzer. Analyze this document and provide a structured analysis in the following format:

1. Document Type and Purpose:
   - Type: [Specify only the exact type of legal document, e.g., "Employment Agreement", "Student Agreement", "Non-Disclosure Agreement"]
   - Purpose: [Explain its main purpose and intent]

2. Parties Involved:
   - List each party with their role (e.g., "Company ABC (Employer)", "John Doe (Employee)")
   - Include any relevant party details mentioned

3. Important Dates:
   - Effective Date: [Date the agreement becomes effective]
   - Termination Date: [If specified]
   - Other Key Dates: [List any other significant dates]

4. Payment Terms and Financial Details:
   - Payment Amount: [Specify amounts]
   - Payment Schedule: [Frequency, due dates]
   - Payment Method: [If specified]
   - Late Payment Terms: [If any]

5. Key Terms and Conditions:
   - List each major term briefly
   - Highlight any unusual clauses
   - Include key obligations

6. Risk Assessment:
   - Risk Level: [High/Medium/Low]
   - Risk Factors: [List specific risks]
   - Concerning Elements: [List red flags]

7. Missing or Unclear Elements:
   - Required Information: [List missing items]
   - Ambiguous Terms: [List unclear terms]
   - Recommended Additions: [Key missing clauses]

8. Completion Score:
   - Score: [0.0-1.0 decimal format, e.g., 0.7]
   - Explanation: [Brief reason for score]
   - Required to Complete: [Key missing items]

9. Plain English Summary:
   - Overview: [2-3 sentences max]
   - Key Rights: [Main rights]
   - Key Obligations: [Main obligations]

Keep responses clear and use simple bullet points without asterisks.

Document content to analyze:
{document_text}
"""
