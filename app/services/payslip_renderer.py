"""
Printable HTML payslips (single and bulk).

The browser's print-to-PDF turns these into PDFs; no server-side
rasterization happens here.
"""
import html
import logging
import re
from typing import List, Optional

from app.core.config import CompanySettings, settings
from app.schemas.payslip import Payslip
from app.services.money import format_inr
from app.services.number_words import to_words

logger = logging.getLogger(__name__)

RUPEE = "₹"

PAYSLIP_STYLES = """
    body { font-family: Arial, sans-serif; font-size: 12px; margin: 0; padding: 20px; background: white; color: black; }
    .payslip-container { max-width: 800px; margin: 0 auto 40px auto; border: 2px solid #000; padding: 0; }
    .payslip-container.page-break { page-break-before: always; margin-top: 0; }
    .header { text-align: center; padding: 20px; border-bottom: 2px solid #000; background-color: #f8f9fa; }
    .company-name { font-size: 24px; font-weight: bold; margin-bottom: 10px; }
    .company-address { font-size: 14px; margin-bottom: 15px; }
    .payslip-title { font-size: 18px; font-weight: bold; text-decoration: underline; }
    .employee-info { display: flex; padding: 15px; border-bottom: 1px solid #000; }
    .employee-left, .employee-right { flex: 1; }
    .info-row { margin-bottom: 8px; }
    .label { font-weight: bold; display: inline-block; width: 150px; }
    .salary-table { width: 100%; border-collapse: collapse; margin-top: 0; }
    .salary-table th, .salary-table td { border: 1px solid #000; padding: 8px; text-align: left; }
    .salary-table th { background-color: #f8f9fa; font-weight: bold; text-align: center; }
    .amount { text-align: right; font-weight: bold; }
    .total-row { font-weight: bold; background-color: #e9ecef; }
    .net-salary { background-color: #d4edda; font-weight: bold; font-size: 14px; }
    .amount-in-words { padding: 15px; border-top: 1px solid #000; font-weight: bold; }
    .footer { display: flex; justify-content: space-between; padding: 20px; border-top: 1px solid #000; }
    .signature-section { text-align: center; margin-top: 30px; }
    .signature-line { border-top: 1px solid #000; width: 200px; margin: 0 auto; padding-top: 5px; }
    .render-error { border: 2px solid red; padding: 20px; margin: 20px; text-align: center; }
    @media print {
        body { padding: 0; }
        .payslip-container { margin-bottom: 0; page-break-after: always; }
        .payslip-container:last-child { page-break-after: avoid; }
    }
"""


def _e(value) -> str:
    return html.escape(str(value if value is not None else ""))


def _bank_line(label: str, value: str) -> str:
    return f"<div>{label}: {_e(value) if value else 'Not provided'}</div>"


def _filename_part(value) -> str:
    return re.sub(r"[^A-Za-z0-9_.-]", "", str(value))


def payslip_filename(payslip: Payslip) -> str:
    emp_id = _filename_part(payslip.employee.employee_id)
    return f"payslip-{emp_id}-{_filename_part(payslip.month)}-{payslip.year}.html"


def _payslip_block(payslip: Payslip, company: CompanySettings, page_break: bool = False) -> str:
    emp = payslip.employee
    if not emp.name:
        raise ValueError("Invalid employee data provided to payslip renderer")

    words = to_words(payslip.net_salary)
    css_class = "payslip-container page-break" if page_break else "payslip-container"

    return f"""
    <div class="{css_class}">
        <div class="header">
            <div class="company-name">{_e(company.name)}</div>
            <div class="company-address">{_e(company.address)}</div>
            <div class="payslip-title">SALARY SLIP</div>
        </div>

        <div class="employee-info">
            <div class="employee-left">
                <div class="info-row"><span class="label">Employee Name:</span> {_e(emp.name)}</div>
                <div class="info-row"><span class="label">Employee ID:</span> {_e(emp.employee_id)}</div>
                <div class="info-row"><span class="label">Designation:</span> {_e(emp.designation or 'Not specified')}</div>
                <div class="info-row"><span class="label">Date of Joining:</span> {_e(emp.date_of_joining)}</div>
                <div class="info-row"><span class="label">ESI Amount:</span> {RUPEE}{format_inr(emp.esi)}</div>
                <div class="info-row"><span class="label">PF Amount:</span> {RUPEE}{format_inr(emp.provident_fund)}</div>
            </div>
            <div class="employee-right">
                <div class="info-row"><span class="label">Pay Period:</span> {_e(payslip.month)} {payslip.year}</div>
                <div class="info-row"><span class="label">Working Days:</span> {payslip.working_days}</div>
                <div class="info-row"><span class="label">Actual Working Days:</span> {payslip.actual_working_days}</div>
                <div class="info-row"><span class="label">Generated Date:</span> {_e(payslip.generated_date)}</div>
                <div class="info-row"><span class="label">Account No:</span> {_e(emp.account_number)}</div>
            </div>
        </div>

        <table class="salary-table">
            <tr>
                <th style="width: 35%;">EARNINGS</th>
                <th style="width: 15%;">AMOUNT ({RUPEE})</th>
                <th style="width: 35%;">DEDUCTIONS</th>
                <th style="width: 15%;">AMOUNT ({RUPEE})</th>
            </tr>
            <tr>
                <td>Basic Salary</td>
                <td class="amount">{format_inr(emp.basic_salary)}</td>
                <td>Provident Fund</td>
                <td class="amount">{format_inr(emp.provident_fund)}</td>
            </tr>
            <tr>
                <td></td>
                <td></td>
                <td>ESI</td>
                <td class="amount">{format_inr(emp.esi)}</td>
            </tr>
            <tr>
                <td></td>
                <td></td>
                <td>Other Deductions</td>
                <td class="amount">{format_inr(emp.other_deductions)}</td>
            </tr>
            <tr class="total-row">
                <td><strong>GROSS EARNINGS</strong></td>
                <td class="amount"><strong>{RUPEE}{format_inr(payslip.gross_earnings)}</strong></td>
                <td><strong>TOTAL DEDUCTIONS</strong></td>
                <td class="amount"><strong>{RUPEE}{format_inr(payslip.total_deductions)}</strong></td>
            </tr>
            <tr class="net-salary">
                <td colspan="3"><strong>NET SALARY</strong></td>
                <td class="amount"><strong>{RUPEE}{format_inr(payslip.net_salary)}</strong></td>
            </tr>
        </table>

        <div class="amount-in-words">
            <strong>Net Salary in Words:</strong> {RUPEE}{_e(words)}
        </div>

        <div class="footer">
            <div>
                <div><strong>Bank Details:</strong></div>
                {_bank_line('Bank', emp.bank_name)}
                {_bank_line('Account', emp.account_number)}
                {_bank_line('IFSC', emp.ifsc_code)}
            </div>
            <div class="signature-section">
                <div>Authorized Signatory</div>
                <div class="signature-line"></div>
            </div>
        </div>
    </div>
    """


def _document(title: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{_e(title)}</title>
    <style>{PAYSLIP_STYLES}</style>
</head>
<body>
{body}
</body>
</html>
"""


def _error_document(title: str, error: Exception) -> str:
    body = f"""
    <div class="render-error">
        <h2>{_e(title)}</h2>
        <p>There was an error generating the payslip. Please check the employee data and try again.</p>
        <p style="color: red; font-size: 12px;">Error: {_e(error)}</p>
    </div>
    """
    return _document("Error", body)


def render_payslip_html(payslip: Payslip, company: Optional[CompanySettings] = None) -> str:
    """Render one payslip as a standalone HTML document."""
    company = company or settings.company
    try:
        block = _payslip_block(payslip, company)
    except ValueError as e:
        logger.error(f"Error generating payslip HTML: {e}", extra={"employee_id": payslip.employee.employee_id})
        return _error_document("Error Generating Payslip", e)
    return _document(f"Payslip - {payslip.employee.name} - {payslip.month} {payslip.year}", block)


def render_bulk_payslips_html(payslips: List[Payslip], company: Optional[CompanySettings] = None) -> str:
    """
    Render many payslips into one printable document, one per page.

    A payslip that fails to render is replaced by an inline error block so
    the rest of the batch still prints.
    """
    if not payslips:
        return ""

    company = company or settings.company
    blocks = []
    for index, payslip in enumerate(payslips):
        try:
            blocks.append(_payslip_block(payslip, company, page_break=index > 0))
        except ValueError as e:
            logger.error(f"Error in individual payslip {index + 1}: {e}")
            blocks.append(
                f"""
    <div class="render-error">
        <h3>Error in Payslip {index + 1}</h3>
        <p>Employee: {_e(payslip.employee.name or 'Unknown')}</p>
        <p style="color: red;">Error: {_e(e)}</p>
    </div>
    """
            )

    first = payslips[0]
    return _document(f"Payslips - {first.month} {first.year}", "\n".join(blocks))
