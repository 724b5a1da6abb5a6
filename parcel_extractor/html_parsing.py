import re
import copy
import logging

from bs4 import BeautifulSoup

from .utils import clean_text, parse_currency, parse_date_to_iso, parse_int

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h1", "h2", "h3", "h4", "caption"]


def load_soup(html):
    return BeautifulSoup(html, "html.parser")


def _normalize_label(text):
    return re.sub(r"[^a-z0-9#]+", " ", clean_text(text).lower()).strip()


def _title_matches(text, targets):
    text = _normalize_label(text)
    if not text:
        return False
    return any(text == t or text.startswith(t) for t in targets)


def find_section(soup, titles):
    """
    Find the block holding a titled module of the page.

    qPublic pages wrap modules in <section id="ctlBodyPane_..."> with a header
    title; other sites use a plain heading, in which case the heading's parent
    (or the captioned table) is returned.
    """
    targets = [_normalize_label(t) for t in titles if t]
    if not targets:
        return None

    for section in soup.select("section[id^='ctlBodyPane_']"):
        header = section.select_one("header .title") or section.find("header")
        if header and _title_matches(header.get_text(" "), targets):
            return section

    for target in targets:
        for heading in soup.find_all(HEADING_TAGS + ["div"]):
            if heading.name == "div" and "title" not in (heading.get("class") or []):
                continue
            if _normalize_label(heading.get_text(" ")) == target:
                return heading.parent
    return None


def cell_lines(tag):
    """Text lines of a cell, split on <br> and block boundaries"""
    if tag is None:
        return []
    clone = copy.copy(tag)
    for junk in clone.find_all(["script", "style"]):
        junk.decompose()
    for br in clone.find_all("br"):
        br.replace_with("\n")
    lines = []
    for line in clone.get_text("\n").split("\n"):
        line = clean_text(line)
        if line:
            lines.append(line)
    return lines


def cell_text(tag, separator=" "):
    return separator.join(cell_lines(tag))


TRAILING_JOIN = re.compile(r"(?:&|\bAND)\s*$", re.IGNORECASE)
LEADING_JOIN = re.compile(r"^\s*(?:&|AND\b)", re.IGNORECASE)


def join_owner_lines(lines):
    """Owner lines as comma separated entries, keeping lines wrapped at an & or AND together"""
    merged = []
    for line in lines:
        if merged and (TRAILING_JOIN.search(merged[-1]) or LEADING_JOIN.match(line)):
            merged[-1] = f"{merged[-1]} {line}"
        else:
            merged.append(line)
    return ", ".join(merged)


def label_rows(container):
    """(label, value cell) pairs from th/td, two-cell td rows and dt/dd lists"""
    if container is None:
        return []
    rows = []
    for tr in container.find_all("tr"):
        cells = tr.find_all(["th", "td"], recursive=False)
        if len(cells) >= 2:
            rows.append((clean_text(cells[0].get_text(" ")), cells[1]))
    for dt in container.find_all("dt"):
        dd = dt.find_next_sibling("dd")
        if dd is not None:
            rows.append((clean_text(dt.get_text(" ")), dd))
    return rows


def find_labeled_cell(soup, labels, sections=None, exclude=()):
    """First value cell whose label matches one of labels, searching sections before the whole page"""
    targets = [_normalize_label(label) for label in labels]
    excluded = [_normalize_label(e) for e in exclude]
    containers = [s for s in (sections or []) if s is not None] + [soup]
    for container in containers:
        for label, cell in label_rows(container):
            normalized = _normalize_label(label)
            if not normalized or any(e in normalized for e in excluded):
                continue
            if any(normalized == t or normalized.startswith(t) for t in targets):
                return cell
    return None


def find_labeled_value(soup, labels, sections=None, exclude=()):
    cell = find_labeled_cell(soup, labels, sections, exclude)
    if cell is None:
        return None
    return cell_text(cell) or None


def extract_owner_text(soup, profile):
    """Raw owner listing, one comma separated entry per owner line"""
    section = find_section(soup, profile.owner_section_titles)
    cell = find_labeled_cell(
        soup, profile.owner_labels, sections=[section], exclude=("address", "mailing")
    )
    if cell is not None:
        return join_owner_lines(cell_lines(cell)) or None

    scope = section or soup
    spans = scope.select("[id*='OwnerName'], [id*='sprDeedName']")
    names = [clean_text(s.get_text(" ")) for s in spans if clean_text(s.get_text(" "))]
    if names:
        return ", ".join(names)

    if section is not None:
        # Heading followed by a name/address block: first line is the owner
        block = section.find(class_=re.compile("border|owner", re.I))
        lines = cell_lines(block) if block is not None else []
        if lines:
            return lines[0]
    return None


def extract_mailing_address(soup, profile):
    section = find_section(soup, profile.mailing_section_titles)
    cell = find_labeled_cell(soup, profile.mailing_labels, sections=[section])
    if cell is not None:
        return ", ".join(cell_lines(cell)) or None

    if section is not None:
        block = section.find(class_=re.compile("border|owner", re.I))
        lines = cell_lines(block) if block is not None else []
        if len(lines) > 1:
            return ", ".join(lines[1:])
    return None


def _header_cells(table):
    header_row = None
    thead = table.find("thead")
    if thead is not None:
        header_row = thead.find("tr")
    if header_row is None:
        header_row = table.find("tr")
    if header_row is None:
        return None, []
    return header_row, [_normalize_label(c.get_text(" ")) for c in header_row.find_all(["th", "td"])]


def _column(headers, *keywords, exclude=()):
    for idx, header in enumerate(headers):
        if any(e in header for e in exclude):
            continue
        if any(k in header for k in keywords):
            return idx
    return None


def _find_table(soup, section_titles, required):
    section = find_section(soup, section_titles)
    for scope in [section, soup]:
        if scope is None:
            continue
        for table in scope.find_all("table"):
            _, headers = _header_cells(table)
            if headers and all(any(k in h for h in headers for k in group) for group in required):
                return table
    return None


def _data_rows(table, header_row):
    rows = []
    for tr in table.find_all("tr"):
        if tr is header_row or tr.find_parent("thead") is not None:
            continue
        cells = tr.find_all(["td", "th"])
        if cells:
            rows.append((tr, cells))
    return rows


def _cell(cells, idx):
    if idx is None or idx >= len(cells):
        return None
    return cells[idx]


def parse_sales_table(soup, profile):
    """Sales rows as dicts with ISO date, price, deed reference, grantee text and document link"""
    table = _find_table(soup, profile.sales_section_titles, [("date",), ("price", "amount", "grantee", "consideration")])
    if table is None:
        logger.info("No sales table found")
        return []

    header_row, headers = _header_cells(table)
    columns = {
        "date": _column(headers, "date"),
        "price": _column(headers, "price", "amount", "consideration"),
        "instrument_number": _column(headers, "instrument number", "instrument #", "instr #", "doc number", "document number"),
        "instrument": _column(headers, "instrument", "deed type", "deed", "type", exclude=("number", "#")),
        "book_page": _column(headers, "book page", "book/page", "or book"),
        "book": _column(headers, "book", exclude=("page",)),
        "page": _column(headers, "page", exclude=("book",)),
        "grantor": _column(headers, "grantor", "seller"),
        "grantee": _column(headers, "grantee", "buyer", "purchaser"),
    }

    sales = []
    for tr, cells in _data_rows(table, header_row):
        date_cell = _cell(cells, columns["date"])
        iso = parse_date_to_iso(cell_text(date_cell)) if date_cell is not None else None
        if not iso:
            continue
        sale = {"date": iso}
        price_cell = _cell(cells, columns["price"])
        sale["price"] = parse_currency(cell_text(price_cell)) if price_cell is not None else None
        for key in ("instrument", "instrument_number", "book", "page"):
            value_cell = _cell(cells, columns[key])
            sale[key] = (cell_text(value_cell, ", ") or None) if value_cell is not None else None
        for key in ("grantor", "grantee"):
            value_cell = _cell(cells, columns[key])
            sale[key] = (join_owner_lines(cell_lines(value_cell)) or None) if value_cell is not None else None
        book_page_cell = _cell(cells, columns["book_page"])
        if book_page_cell is not None and "/" in cell_text(book_page_cell):
            book, page = cell_text(book_page_cell).split("/", 1)
            sale["book"] = sale["book"] or clean_text(book) or None
            sale["page"] = sale["page"] or clean_text(page) or None
        link = tr.find("a", href=True)
        sale["url"] = link["href"].strip() if link is not None and not link["href"].startswith("javascript") else None
        sales.append(sale)
    return sales


def parse_value_table(soup, profile):
    """Yearly valuation rows: land, building, market, assessed and taxable amounts"""
    table = _find_table(soup, profile.values_section_titles, [("year",), ("land", "market", "assessed", "taxable")])
    if table is None:
        return []

    header_row, headers = _header_cells(table)
    columns = {
        "year": _column(headers, "year"),
        "land": _column(headers, "land"),
        "building": _column(headers, "building", "improvement"),
        "market": _column(headers, "just", "market"),
        "assessed": _column(headers, "assessed"),
        "taxable": _column(headers, "taxable"),
    }
    values = []
    for _, cells in _data_rows(table, header_row):
        year_cell = _cell(cells, columns["year"])
        year = parse_int(cell_text(year_cell)) if year_cell is not None else None
        if not year:
            continue
        row = {"year": year}
        for key in ("land", "building", "market", "assessed", "taxable"):
            value_cell = _cell(cells, columns[key])
            row[key] = parse_currency(cell_text(value_cell)) if value_cell is not None else None
        values.append(row)
    return values
