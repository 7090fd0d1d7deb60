"""Burger Menu Button."""

COMPONENT = {
    "id": "burger-menu-button",
    "title": "Burger Menu Button",
    "description": "A responsive burger menu button with smooth open/close animations",
    "category": "BUTTONS",
    "date": "2025-03-11",
    "previewImage": "/images/buttons/burger-menu-button.jpg",
    "previewVideo": "/videos/buttons/burger-menu-button.mp4",
    "mediaType": "video",
    "tags": ["UI", "Animation", "Interactive"],
    "author": "Darco Studio",
    "featured": True,
    "slug": "burger-menu-button",
    "externalSourceUrl": "https://github.com/darco-studio/ui-components/burger-menu",
    "implementation": """
<h4>Toggle State</h4>
<p>The button toggles an <code>open</code> class on click and mirrors it on
<code>aria-expanded</code> so assistive technology reports the menu state.</p>
""",
    "moreInformation": """
<h4>Bar Geometry</h4>
<p>The open state rotates the outer bars by 45 degrees around their centre and
fades the middle bar. Adjust <code>translateY</code> if you change the bar height
or the gap between bars.</p>
""",
    "content": {
        "externalScripts": (
            '<script src="https://cdn.jsdelivr.net/npm/gsap@3.12.5/dist/gsap.min.js"></script>\n'
            '<script src="https://cdn.jsdelivr.net/npm/gsap@3.12.5/dist/CustomEase.min.js"></script>'
        ),
        "html": """<!-- Burger Menu Button HTML -->
<button class="burger-menu-button" aria-label="Toggle menu" aria-expanded="false">
  <span class="bar"></span>
  <span class="bar"></span>
  <span class="bar"></span>
</button>""",
        "css": """.burger-menu-button {
  display: flex;
  flex-direction: column;
  justify-content: space-between;
  width: 30px;
  height: 24px;
  background: transparent;
  border: none;
  cursor: pointer;
  padding: 0;
  position: relative;
  transition: all 0.3s ease;
}

.bar {
  display: block;
  width: 100%;
  height: 3px;
  border-radius: 3px;
  background-color: #000;
  transition: all 0.3s ease;
  transform-origin: center;
}

.burger-menu-button.open .bar:nth-child(1) {
  transform: translateY(10.5px) rotate(45deg);
}

.burger-menu-button.open .bar:nth-child(2) {
  opacity: 0;
}

.burger-menu-button.open .bar:nth-child(3) {
  transform: translateY(-10.5px) rotate(-45deg);
}""",
        "js": """// Burger Menu Button JavaScript
document.addEventListener('DOMContentLoaded', function() {
  const burgerButton = document.querySelector('.burger-menu-button');

  if (burgerButton) {
    burgerButton.addEventListener('click', function() {
      this.classList.toggle('open');
      const isOpen = this.classList.contains('open');
      this.setAttribute('aria-expanded', isOpen ? 'true' : 'false');
    });
  }
});""",
    },
}
