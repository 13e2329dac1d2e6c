import html

from ip_location.models.common import LookupResult

PAGE_TITLE = "你的位置信息"
DEGRADED_NOTICE = "位置信息暂时不可用，以下为默认值。"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="zh">
<head>
  <meta charset="UTF-8">
  <title>{title}</title>
  <style>
    body {{ font-family: Arial, sans-serif; text-align: center; padding: 50px; }}
    .info {{ margin: 20px; padding: 20px; border: 1px solid #ccc; border-radius: 5px; }}
    .notice {{ color: #a94442; }}
  </style>
</head>
<body>
  <h1>{title}</h1>
{notice}  <div class="info">
    <p>IP 地址: {ip}</p>
    <p>国家: {country}</p>
    <p>地区: {region}</p>
    <p>城市: {city}</p>
    <p>经纬度: {latitude}, {longitude}</p>
  </div>
</body>
</html>
"""


def format_coordinate(value: float) -> str:
    """Print a coordinate the way a JavaScript number prints.

    Integral values drop the fractional part (0.0 -> "0"), everything else
    uses the shortest round-trip form (10.5 -> "10.5").
    """
    if value.is_integer():
        return str(int(value))
    return repr(value)


def render_location_page(result: LookupResult) -> str:
    """Render the location page for a lookup result.

    All upstream-provided text is HTML-escaped. Rendering is deterministic:
    the same result always produces the same document.
    """
    record = result.record
    notice = f'  <p class="notice">{html.escape(DEGRADED_NOTICE)}</p>\n' if result.degraded else ""
    return PAGE_TEMPLATE.format(
        title=html.escape(PAGE_TITLE),
        notice=notice,
        ip=html.escape(record.ip),
        country=html.escape(record.country),
        region=html.escape(record.region),
        city=html.escape(record.city),
        latitude=format_coordinate(record.latitude),
        longitude=format_coordinate(record.longitude),
    )
