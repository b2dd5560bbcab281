"""Search-results page samples covering each known Google layout."""

GOOGLE_ORGANIC_HTML = """
<html><body>
<div id="search">
  <div class="g">
    <a href="https://example.com/one"><h3>First result</h3></a>
    <div class="VwiC3b">Snippet for the first result.</div>
  </div>
  <div class="g">
    <a href="/url?q=https://example.org/two&amp;sa=U"><h3>Second result</h3></a>
    <div class="VwiC3b">Snippet for the second result.</div>
  </div>
  <div class="g">
    <a href="https://example.net/three"><h3>Third result</h3></a>
  </div>
  <div class="g">
    <a href="https://example.net/no-title"></a>
  </div>
</div>
<script>document.write('<div class="g"><a href="https://evil.test"><h3>Injected</h3></a></div>')</script>
</body></html>
"""

GOOGLE_ALTERNATE_HTML = """
<html><body>
  <div class="tF2Cxc">
    <div class="yuRUbf"><a href="https://alt.example/a"><h3>Alternate A</h3></a></div>
    <div class="VwiC3b">Alternate snippet A</div>
  </div>
  <div class="tF2Cxc">
    <div class="yuRUbf"><a href="https://alt.example/b"><h3>Alternate B</h3></a></div>
  </div>
</body></html>
"""

GOOGLE_NEWS_HTML = """
<html><body>
  <div class="SoaBEf">
    <a href="https://news.example/story-1">
      <div role="heading">Big story one</div>
      <div>Summary of story one</div>
    </a>
  </div>
  <div class="SoaBEf">
    <a href="https://news.example/story-2">
      <div role="heading">Big story two</div>
    </a>
  </div>
  <div class="g">
    <a href="https://example.com/organic"><h3>Organic result</h3></a>
  </div>
</body></html>
"""
