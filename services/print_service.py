import html as _html
from datetime import datetime, date

from core.config import DEFAULT_PAPER_SIZE
from core.time_utils import now_local, parse_timestamp
from services.certificate_service import rest_days


# -------------------------------
# Helpers
# -------------------------------
def _g(obj, key, default=None):
    if obj is None:
        return default
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _esc(v) -> str:
    return _html.escape("" if v is None else str(v), quote=True)


def _to_datetime(v):
    if isinstance(v, datetime):
        return v
    if isinstance(v, date):
        return datetime(v.year, v.month, v.day)
    return parse_timestamp(v)


def paper_size(settings) -> str:
    size = (settings or {}).get("paperSize") or DEFAULT_PAPER_SIZE
    return "A5" if size == "A5" else "A4"


def _scale(settings):
    small = paper_size(settings) == "A5"
    return {
        "padding": "10mm" if small else "15mm",
        "h1": "15pt" if small else "18pt",
        "h2": "11pt" if small else "13pt",
        "body": "8pt" if small else "9pt",
        "content": "9pt" if small else "10pt",
        "title": "13pt" if small else "15pt",
    }


def _letterhead(settings, scale) -> str:
    s = settings or {}
    place = (s.get("address") or "").split(",")[0]
    title = ", ".join(p for p in (s.get("clinicName") or "", place) if p)
    reg = s.get("regNumber") or ""
    spec_line = _esc(s.get("speciality") or "") + (f", Reg. No: {_esc(reg)}" if reg else "")
    return f"""
      <div class="clinic-header"><h1>{_esc(title)}</h1></div>
      <div class="header-content">
        <h2>{_esc(s.get("doctorName") or "")}</h2>
        <p>{_esc(s.get("qualification") or "")}</p>
        <p>{spec_line}</p>
        <p>Mob. {_esc(s.get("phone") or "")}</p>
      </div>
    """


def _document(body, settings, extra_css="") -> str:
    sc = _scale(settings)
    return f"""<html>
<head>
<style>
  @page {{ size: {paper_size(settings)}; margin: 0; }}
  body {{ font-family: "Helvetica", "Arial", sans-serif; padding: {sc["padding"]}; margin: 0; color: #000; }}
  .clinic-header {{ text-align: center; border-bottom: 2pt solid #000; margin-bottom: 12px; }}
  .clinic-header h1 {{ margin: 0; font-size: {sc["h1"]}; text-transform: uppercase; }}
  .header-content {{ border-bottom: 2pt solid #000; margin-bottom: 15px; padding-bottom: 8px; }}
  .header-content h2 {{ margin: 0; font-size: {sc["h2"]}; text-transform: uppercase; }}
  .header-content p {{ margin: 2px 0; font-size: {sc["body"]}; }}
  {extra_css}
</style>
</head>
<body>
{_letterhead(settings, sc)}
{body}
</body>
</html>"""


# -------------------------------
# Prescription
# -------------------------------
def render_prescription_html(patient, medicines, diagnosis, settings=None, now=None) -> str:
    """Printable prescription. `medicines` are MedicineLine objects or dicts."""
    now = now or now_local()
    stamp = now.strftime("%d-%m-%Y, %I:%M %p").replace(", 0", ", ")
    sc = _scale(settings)

    rows = []
    for index, med in enumerate(medicines or [], start=1):
        rows.append(
            f"<tr><td>{index}.</td>"
            f"<td class=\"med-name\">{_esc(_g(med, 'name'))}</td>"
            f"<td>{_esc(_g(med, 'dosage'))}</td>"
            f"<td>{_esc(_g(med, 'duration'))}</td>"
            f"<td>{_esc(_g(med, 'instruction'))}</td></tr>"
        )

    body = f"""
      <div class="patient-info">
        <b>{_esc(_g(patient, 'name'))}</b> ({_esc(_g(patient, 'age'))} / {_esc(_g(patient, 'gender'))})
        <span class="p-date"><b>Date:</b> {stamp}</span>
      </div>
      <div class="diagnosis"><b>DIAGNOSIS:</b> {_esc(diagnosis)}</div>
      <div class="rx-symbol">Rx</div>
      <table>
        <thead><tr><th>#</th><th>Medicine</th><th>Dosage</th><th>Duration</th><th>Instruction</th></tr></thead>
        <tbody>{"".join(rows)}</tbody>
      </table>
    """
    css = f"""
  .patient-info, .diagnosis {{ font-size: {sc["content"]}; margin-bottom: 10px; }}
  .p-date {{ float: right; }}
  .rx-symbol {{ font-size: 17pt; font-weight: 700; font-family: "Times New Roman", serif; }}
  table {{ width: 100%; border-collapse: collapse; }}
  th {{ text-align: left; border-bottom: 1pt solid #000; text-transform: uppercase; }}
  td {{ padding: 6px 4px; font-size: {sc["content"]}; vertical-align: top; }}
  .med-name {{ font-weight: 700; }}
"""
    return _document(body, settings, css)


# -------------------------------
# Medical certificate
# -------------------------------
def salutation(gender):
    """(title, pronoun) used in the certificate text."""
    if gender == "Male":
        return "Mr.", "He"
    if gender == "Female":
        return "Mrs.", "She"
    return "Mr./Mrs.", "He/She"


def render_certificate_html(patient, diagnosis, start_date, end_date, issue_date=None, residence="", settings=None) -> str:
    issued = _to_datetime(issue_date) or now_local()
    start = _to_datetime(start_date)
    end = _to_datetime(end_date)
    sc = _scale(settings)

    # Rest already over at issue time reads in the past tense
    verb = "was" if end is not None and issued.date() > end.date() else "is"
    title, pronoun = salutation(_g(patient, "gender"))
    days = rest_days(start_date, end_date)

    def full(d):
        return f"{d.day} {d.strftime('%B %Y')}" if d else ""

    residence_part = f" residing/working at <strong>{_esc(residence)}</strong>" if (residence or "").strip() else ""
    place = ((settings or {}).get("address") or "").split(",")[0]

    body = f"""
      <div class="title">Medical Certificate</div>
      <div class="content"><p>
        This is to certify that <strong>{title} {_esc(_g(patient, 'name'))}</strong>{residence_part}
        {verb} under my treatment for <strong>{_esc(diagnosis)}</strong>.
        {pronoun} {verb} advised to take rest from <strong>{full(start)}</strong>
        to <strong>{full(end)}</strong> (<strong>{days}</strong> days).
      </p></div>
      <div class="footer">
        <b>Place:</b> {_esc(place)}<br>
        <b>Date:</b> {issued.strftime("%d-%m-%Y")}
        <div class="signature-area"><b>{_esc((settings or {}).get("doctorName") or "")}</b><br>
        Reg. No: {_esc((settings or {}).get("regNumber") or "")}</div>
      </div>
    """
    css = f"""
  .title {{ text-align: center; font-size: {sc["title"]}; font-weight: 800; margin: 30px 0; text-decoration: underline; text-transform: uppercase; }}
  .content {{ font-size: {sc["content"]}; text-align: justify; line-height: 2; }}
  .footer {{ margin-top: 50px; font-size: {sc["content"]}; }}
  .signature-area {{ float: right; text-align: center; width: 180px; }}
"""
    return _document(body, settings, css)


# -------------------------------
# Browser print dialog
# -------------------------------
def print_document(html: str, height: int = 0):
    """Open the browser print dialog for `html` from a Streamlit page."""
    import streamlit.components.v1 as components

    script = "<script>window.onload = function() { setTimeout(function() { window.print(); }, 200); };</script>"
    components.html(html + script, height=height, scrolling=False)
    return {"success": True}
