from sitebuilder.inline import format_inline, rewrite_asset_src, rewrite_href


def test_code_span_is_escaped_and_not_formatted():
    assert format_inline('Use `a <b> *c*`') == 'Use <code>a &lt;b&gt; *c*</code>'


def test_image_rewrites_gitbook_assets():
    html = format_inline('![A "logo"](../.gitbook/assets/logo.png)')
    assert html == '<img src="/assets/images/logo.png" alt="A &quot;logo&quot;" loading="lazy">'


def test_image_keeps_other_sources():
    html = format_inline('![x](https://cdn.example.com/x.png)')
    assert 'src="https://cdn.example.com/x.png"' in html


def test_link_rewrites_markdown_paths():
    assert format_inline('[x](a/b.md)') == '<a href="a/b.html">x</a>'
    assert format_inline('[x](a/README.md)') == '<a href="a/index.html">x</a>'
    assert format_inline('[x](a/)') == '<a href="a/index.html">x</a>'


def test_external_link_opens_in_new_tab():
    html = format_inline('[Site](https://example.com)')
    assert html == '<a href="https://example.com" target="_blank" rel="noopener noreferrer">Site</a>'


def test_link_text_is_formatted():
    assert format_inline('[**bold**](x.md)') == '<a href="x.html"><strong>bold</strong></a>'


def test_link_text_with_code_span():
    assert format_inline('[`cfg`](x.md)') == '<a href="x.html"><code>cfg</code></a>'


def test_emphasis_precedence():
    assert format_inline('***both***') == '<strong><em>both</em></strong>'
    assert format_inline('**bold** and *italic*') == '<strong>bold</strong> and <em>italic</em>'
    assert format_inline('~~gone~~') == '<del>gone</del>'


def test_unbalanced_markers_pass_through():
    assert format_inline('2 * 3 = 6') == '2 * 3 = 6'
    assert format_inline('**open') == '**open'
    assert format_inline('[text](') == '[text]('
    assert format_inline('`unclosed') == '`unclosed'


def test_nul_delimited_text_never_restores_a_code_span():
    assert format_inline('`a` \x00CODE7\x00') == '<code>a</code> CODE7'
    assert format_inline('`a` \x00CODE0\x00') == '<code>a</code> CODE0'


def test_emoji_shortcodes():
    assert format_inline(':warning: careful :check:') == '⚠️ careful ✅'


def test_emoji_replaced_inside_emitted_tags():
    assert format_inline('[:x:](a.md)') == '<a href="a.html">❌</a>'


def test_rewrite_href_order():
    assert rewrite_href('README.md') == 'index.html'
    assert rewrite_href('guide/') == 'guide/index.html'
    assert rewrite_href('#anchor') == '#anchor'


def test_rewrite_asset_src():
    assert rewrite_asset_src('.gitbook/assets/a.png') == '/assets/images/a.png'
    assert rewrite_asset_src('../../.gitbook/assets/a.png') == '/assets/images/a.png'
    assert rewrite_asset_src('img/a.png') == 'img/a.png'
