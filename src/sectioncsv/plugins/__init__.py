from sectioncsv.plugins.readers import text_reader, docx_reader, pdf_reader  # noqa: F401
from sectioncsv.plugins.writers import json_writer, txt_writer, csv_writer  # noqa: F401
