import pytest
from docx import Document

STATEMENT_CSV = (
    "Statement,Header,Field Name,Field Value\n"
    "Statement,Data,BrokerName,Interactive Brokers LLC\n"
    "Trades,Header,Category,Currency,Symbol\n"
    "Trades,Data,Stocks,USD,BIDU\n"
    "Trades,Total,Stocks,USD,\n"
)

@pytest.fixture
def statement_text():
    return STATEMENT_CSV

@pytest.fixture
def statement_csv(tmp_path):
    path = tmp_path / "statement.csv"
    path.write_text(STATEMENT_CSV, encoding="utf-8")
    return str(path)

@pytest.fixture
def sample_docx(tmp_path):
    doc = Document()
    doc.add_paragraph("Statement,Header,Field Name,Field Value")
    doc.add_paragraph("Statement,Data,BrokerName,Interactive Brokers LLC")
    doc.add_paragraph("")

    table = doc.add_table(rows=3, cols=4)
    for r, values in enumerate([
        ("Trades", "Header", "Symbol", "說明"),
        ("Trades", "Data", "BIDU", "百度"),
        ("", "", "", ""),
    ]):
        for c, value in enumerate(values):
            table.cell(r, c).text = value

    path = tmp_path / "statement.docx"
    doc.save(str(path))
    return str(path)

@pytest.fixture
def sample_pdf(tmp_path):
    """Create a text PDF whose lines are a small multi-section statement (fpdf2)."""
    fpdf2 = pytest.importorskip("fpdf")
    pdf = fpdf2.FPDF()
    pdf.add_page()
    pdf.set_font("Helvetica", size=10)
    for line in STATEMENT_CSV.splitlines():
        pdf.cell(text=line)
        pdf.ln()
    path = tmp_path / "statement.pdf"
    pdf.output(str(path))
    return str(path)
