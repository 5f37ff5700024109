"""Client-side scroll-spy payload injected alongside the TOC.

The browser behaviour (smooth scrolling on link click, highlighting the link
of the heading nearest the top of the viewport) lives entirely in this
constant. Python only fills in the selectors so they match the rendered TOC.
"""

from __future__ import annotations

import json

_SCROLL_SPY_TEMPLATE = """
// Table of Contents Scroll Spy
(function() {
    const tocList = document.getElementById(__LIST_ID__);
    const postContent = document.querySelector(__CONTENT_SELECTOR__);

    if (!tocList || !postContent) return;

    const headings = postContent.querySelectorAll(__HEADING_SELECTOR__);

    if (headings.length === 0) {
        const tocSidebar = document.querySelector('.toc-sidebar');
        if (tocSidebar) tocSidebar.style.display = 'none';
        return;
    }

    // Add click handlers for smooth scrolling
    tocList.querySelectorAll('.toc-link').forEach(link => {
        link.addEventListener('click', (e) => {
            e.preventDefault();
            const targetId = link.getAttribute('href').slice(1);
            const target = document.getElementById(targetId);
            if (target) {
                target.scrollIntoView({ behavior: 'smooth' });
                history.pushState(null, null, '#' + targetId);
            }
        });
    });

    // Scroll spy with IntersectionObserver
    const tocLinks = tocList.querySelectorAll('.toc-link');

    const observerOptions = {
        rootMargin: '-80px 0px -70% 0px',
        threshold: 0
    };

    let activeLink = null;

    const observer = new IntersectionObserver((entries) => {
        entries.forEach(entry => {
            const id = entry.target.id;
            const link = tocList.querySelector(`a[href="#${id}"]`);

            if (entry.isIntersecting && link) {
                if (activeLink) {
                    activeLink.classList.remove('active');
                }
                link.classList.add('active');
                activeLink = link;
            }
        });
    }, observerOptions);

    headings.forEach(heading => observer.observe(heading));
})();
"""


def scroll_spy_script(
    *,
    list_id: str = "toc-list",
    container_class: str = "post-content",
    levels: tuple[int, ...] = (2, 3, 4),
) -> str:
    """Return the scroll-spy JavaScript with selectors filled in as JS string literals."""
    heading_selector = ", ".join(f"h{level}" for level in levels)
    return (
        _SCROLL_SPY_TEMPLATE.replace("__LIST_ID__", json.dumps(list_id))
        .replace("__CONTENT_SELECTOR__", json.dumps(f".{container_class}"))
        .replace("__HEADING_SELECTOR__", json.dumps(heading_selector))
    )


def script_tag(script: str) -> str:
    return f"<script>{script}</script>"
