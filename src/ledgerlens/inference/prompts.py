"""Prompts for advice text."""

DOCUMENT_ADVICE_PROMPT = """A small-business owner uploaded the document "{filename}".
Automated analysis produced the following.

Risk level: {risk_level}
Transactions extracted: {transaction_count}
Net amount: {net_amount}

Findings:
{findings}

Give two or three short, practical suggestions about bookkeeping or tax
deductions for these results. Do not repeat the findings verbatim."""


def get_document_advice_prompt(
    filename: str,
    risk_level: str,
    transaction_count: int,
    net_amount: str,
    findings: list[str],
) -> str:
    """
    Generate the advice prompt for one document analysis.

    Args:
        filename: Original filename
        risk_level: Derived risk flag
        transaction_count: Number of extracted tuples
        net_amount: Signed net of all tuples
        findings: Human-readable findings

    Returns:
        Complete prompt for the inference service
    """
    findings_text = "\n".join(f"- {finding}" for finding in findings) or "- none"

    return DOCUMENT_ADVICE_PROMPT.format(
        filename=filename,
        risk_level=risk_level,
        transaction_count=transaction_count,
        net_amount=net_amount,
        findings=findings_text,
    )
