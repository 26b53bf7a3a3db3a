import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import sectioncsv.plugins  # Ensure plugins are registered
from sectioncsv.config import AppConfig
from sectioncsv.core.engine import CoreEngine
from sectioncsv.core.errors import OfferImportError, SectionCsvError
from sectioncsv.core.offer_import import parse_offer_import
from sectioncsv.i18n.i18n import i18n

_DELIMITER_WORDS = {"tab": "\t", "\\t": "\t", "comma": ",", "pipe": "|"}


def _delimiter(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return _DELIMITER_WORDS.get(value.lower(), value)


def _pick(value: Any, fallback: Any) -> Any:
    return fallback if value is None else value


def _read_options(args: argparse.Namespace, cfg: AppConfig) -> Dict[str, Any]:
    return {
        "delimiter": _delimiter(_pick(args.delimiter, cfg.delimiter)),
        "include_tables": args.include_tables,
        "section_col_index": _pick(args.section_col, cfg.section_col_index),
        "row_type_col_index": _pick(args.row_type_col, cfg.row_type_col_index),
        "include_raw": args.include_raw or cfg.include_raw,
    }


def _target_path(fpath: Path, out_dir: Optional[Path], out_ext: str) -> Path:
    target = (out_dir / f"{fpath.stem}{out_ext}") if out_dir else fpath.with_suffix(out_ext)
    if target.resolve() == fpath.resolve():
        # never overwrite the input itself
        target = target.with_name(f"{fpath.stem}.sections{out_ext}")
    return target


def convert_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    out_dir = Path(args.output_dir) if args.output_dir else None
    if out_dir:
        out_dir.mkdir(parents=True, exist_ok=True)

    read_opts = _read_options(args, cfg)
    write_opts = {
        "table_format": _pick(args.table_format, cfg.table_format),
        "normalize_tables": args.normalize_tables,
        "utf8_bom": args.utf8_bom or cfg.utf8_bom,
        "delimiter": read_opts["delimiter"],
    }

    out_type = _pick(args.out_type, cfg.out_type)
    out_ext = out_type if out_type.startswith(".") else f".{out_type}"

    failed = 0
    for f in args.files:
        fpath = Path(f)
        try:
            target = _target_path(fpath, out_dir, out_ext)
            print(f"{i18n.t('log_start')}: {fpath.name}")
            CoreEngine.convert(str(fpath), str(target), read_opts, write_opts)
            print(i18n.format("log_success", file=fpath.name))
        except (SectionCsvError, OSError) as e:
            failed += 1
            print(i18n.format("log_fail", file=fpath.name, err=str(e)), file=sys.stderr)

    return 1 if failed else 0


def sections_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    fpath = Path(args.file)
    try:
        document = CoreEngine.parse(str(fpath), _read_options(args, cfg))
    except SectionCsvError as e:
        print(i18n.format("log_fail", file=fpath.name, err=str(e)), file=sys.stderr)
        return 1

    if not document.sections:
        print(i18n.t("no_sections"))
    for name, section in document.sections.items():
        print(i18n.format("section_summary",
            name=name,
            rows=len(section.rows),
            totals=len(section.totals),
            sub_totals=len(section.sub_totals),
            notes=len(section.notes),
        ))
    print(i18n.format("unparsed_summary", count=len(document.unparsed_rows)))
    return 0


def offers_cmd(args: argparse.Namespace, cfg: AppConfig) -> int:
    fpath = Path(args.file)
    try:
        text = fpath.read_text(encoding="utf-8-sig")
        items = parse_offer_import(text, _delimiter(args.delimiter) or ",")
    except (OSError, OfferImportError) as e:
        print(i18n.format("log_fail", file=fpath.name, err=str(e)), file=sys.stderr)
        return 1

    for item in items:
        print(f"{item.sku}\t{item.qty}")
    print(i18n.format("offers_found", count=len(items)))
    return 0


def _add_parse_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--section-col", type=int, default=None, help="Column index of the section name")
    p.add_argument("--row-type-col", type=int, default=None, help="Column index of the row type")
    p.add_argument("--include-raw", action="store_true", help="Add a _raw JSON copy of the values to each record")
    p.add_argument("--delimiter", default=None, help="Delimiter character, or tab/comma/pipe (default: auto-detect)")
    p.add_argument("--include-tables", action="store_true", help="Use detected PDF tables instead of page text")


def main() -> int:
    parser = argparse.ArgumentParser(description="Multi-section CSV parser CLI")
    parser.add_argument("--config", default=None, help="Path to a JSON config file")
    parser.add_argument("--lang", default=None, help="Language for logs")
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert_parser = subparsers.add_parser("convert", help="Parse files and export their sections")
    convert_parser.add_argument("files", nargs="+", help="Input files")
    convert_parser.add_argument("--out-type", default=None, help="Output format (json, txt or csv)")
    convert_parser.add_argument("--output-dir", default="", help="Output directory")
    _add_parse_options(convert_parser)

    # Output options
    convert_parser.add_argument("--table-format", default=None, choices=["tsv", "pipe"])
    convert_parser.add_argument("--no-normalize-tables", action="store_false", dest="normalize_tables")
    convert_parser.add_argument("--utf8-bom", action="store_true")

    sections_parser = subparsers.add_parser("sections", help="Summarize the sections of a file")
    sections_parser.add_argument("file", help="Input file")
    _add_parse_options(sections_parser)

    offers_parser = subparsers.add_parser("offers", help="Extract SKU/quantity pairs from an offer import file")
    offers_parser.add_argument("file", help="Input file")
    offers_parser.add_argument("--delimiter", default=None, help="Delimiter character (default: comma)")

    args = parser.parse_args()

    cfg = AppConfig.load(args.config)
    i18n.set_locale(_pick(args.lang, cfg.lang))

    if args.command == "convert":
        return convert_cmd(args, cfg)
    if args.command == "sections":
        return sections_cmd(args, cfg)
    return offers_cmd(args, cfg)

if __name__ == "__main__":
    sys.exit(main())
