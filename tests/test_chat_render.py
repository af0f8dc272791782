from osrs_oracle.domain.models import ItemReference
from osrs_oracle.ui import chat_render


def test_item_html_has_wiki_image_with_graceful_fallback():
    html = chat_render.item_html(ItemReference(display_name="Abyssal whip", short_info="Slash: +82"))
    assert 'src="https://oldschool.runescape.wiki/images/Abyssal_whip.png"' in html
    assert "onerror=\"this.style.display='none'\"" in html
    assert "Slash: +82" in html


def test_message_html_escapes_plain_text_and_names():
    html = chat_render.message_html("<b>hi</b> [[Toxic <blowpipe>|Ranged: +30]]")
    assert html.startswith("&lt;b&gt;hi&lt;/b&gt; ")
    assert "Toxic &lt;blowpipe&gt;" in html
    assert "<blowpipe>" not in html


def test_message_html_leaves_malformed_markup_as_text():
    assert chat_render.message_html("[[Abyssal whip]]") == "[[Abyssal whip]]"
