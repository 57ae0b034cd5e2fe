import pytest
from bs4 import BeautifulSoup
from pydantic import ValidationError

from marketing_agent.retrieval.extract import collapse_whitespace, extract_digest, is_noise
from marketing_agent.schemas.digest import PageDigest


def test_noise_content_never_reaches_digest(sample_html):
    """
    WHY: Script, style, nav, footer, iframe and noscript text wastes prompt budget and confuses the model.
    HOW: Extract a page that contains every noise element with recognizable text.
    EXPECTED: None of that text appears anywhere in the body excerpt or headers.
    """
    digest = extract_digest(sample_html)

    for noise in ("secret-token", "color: red", "Menu", "Home", "Please enable JavaScript",
                  "frame text", "Copyright Acme Corp", "hidden comment"):
        assert noise not in digest.body_excerpt
    assert "Menu" not in digest.h1s


def test_headers_and_meta(sample_html):
    digest = extract_digest(sample_html)

    assert digest.title == "Acme Rockets"
    assert digest.meta_description == "Rockets for everyone"
    assert digest.h1_text == "Fly Higher | Since 1949"
    assert digest.h2_text == "Products | Pricing"


def test_body_whitespace_is_collapsed(sample_html):
    digest = extract_digest(sample_html)

    assert "Acme builds reusable rockets." in digest.body_excerpt
    assert "  " not in digest.body_excerpt
    assert "\n" not in digest.body_excerpt


def test_body_excerpt_is_capped_at_5000_chars():
    """
    WHY: The prompt has a predictable size only if the body excerpt is bounded.
    HOW: Extract a page with ~18000 characters of body text.
    EXPECTED: Exactly the first 5000 characters are kept.
    """
    html = "<html><body><p>" + "rocket " * 3000 + "</p></body></html>"
    digest = extract_digest(html)

    assert len(digest.body_excerpt) == 5000
    assert digest.body_excerpt.startswith("rocket rocket")


def test_extraction_does_not_mutate_the_tree(sample_html):
    soup = BeautifulSoup(sample_html, "html.parser")
    before = str(soup)

    script = soup.find("script")
    assert is_noise(script)
    assert is_noise(script.string)
    assert not is_noise(soup.find("p"))
    assert str(soup) == before


def test_meta_description_name_is_case_insensitive():
    html = '<html><head><meta name="Description" content=" Tagline "></head><body>x</body></html>'
    assert extract_digest(html).meta_description == "Tagline"


def test_collapse_whitespace():
    assert collapse_whitespace("  a \n\t b   c ") == "a b c"


def test_render_uses_fixed_labels_in_order():
    """
    WHY: The labeled layout is part of the prompt contract; label changes change model behavior.
    HOW: Render a digest with known values.
    EXPECTED: Five lines with the exact labels and the ' | ' header separator.
    """
    digest = PageDigest(
        title="Acme",
        meta_description="Rockets",
        h1s=("Fly", "Higher"),
        h2s=(),
        body_excerpt="We build rockets.",
    )

    assert digest.render() == (
        "Title: Acme\n"
        "Meta Description: Rockets\n"
        "Main Headers (H1): Fly | Higher\n"
        "Sub Headers (H2): \n"
        "Body Content: We build rockets."
    )


def test_digest_is_immutable():
    digest = PageDigest(title="a", meta_description="", body_excerpt="b")
    with pytest.raises(ValidationError):
        digest.title = "changed"


@pytest.mark.parametrize("html", [
    "<title>Acme Title</title><p>Hello</p>",
    "<html><head><title>Acme Title</title><meta name='description' content='Rockets'></head><p>Hello</p></html>",
])
def test_page_without_body_tag_keeps_head_out_of_excerpt(html):
    """
    WHY: Fragments and sloppy pages often have no <body>; the page title is metadata, not body copy.
    HOW: Extract pages that never open a <body> tag.
    EXPECTED: The title is still picked up, but the body excerpt holds only the paragraph text.
    """
    digest = extract_digest(html)

    assert digest.title == "Acme Title"
    assert digest.body_excerpt == "Hello"
