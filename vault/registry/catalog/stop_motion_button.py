"""Stop Motion Button."""

COMPONENT = {
    "id": "stop-motion-button",
    "title": "Stop Motion Button",
    "description": "An animated stop motion button using CSS steps animation",
    "category": "BUTTONS",
    "date": "2025-03-11",
    "previewImage": "/images/buttons/stop-motion-button.jpg",
    "previewVideo": "/videos/buttons/stop-motion-button.mp4",
    "mediaType": "video",
    "tags": ["UI", "Animation", "Interactive"],
    "author": "Darco Studio",
    "featured": True,
    "slug": "stop-motion-button",
    "externalSourceUrl": "https://github.com/darco-studio/ui-components/stop-motion",
    "implementation": """
<h4>CSS Steps Animation (Keyframes)</h4>
<p>The sprite strip is moved with a <code>steps()</code> timing function, which
plays the animation frame by frame and produces the stop motion effect.</p>
<pre><code class="language-css">
[data-sprite] .btn-stop-motion__icon-svg {
  animation: sprite 0.45s steps(4, end) infinite;
}
</code></pre>
""",
    "moreInformation": """
<h4>Wiggle Animation</h4>
<p>Hovering the button swaps the label between two rotations in two steps,
giving a hand-drawn wiggle.</p>
""",
    "content": {
        "externalScripts": "",
        "html": """<!-- Stop Motion Button HTML -->
<a href="#" class="btn-stop-motion" data-wiggle data-sprite>
  <div class="btn-stop-motion__inner">
    <div class="btn-stop-motion__back">
      <svg class="btn-stop-motion__back-svg" xmlns="http://www.w3.org/2000/svg" width="100%" viewbox="0 0 678 82" fill="none" preserveaspectratio="none"></svg>
    </div>
    <div class="btn-stop-motion__icon">
      <div class="before__100"></div>
      <svg class="btn-stop-motion__icon-svg" xmlns="http://www.w3.org/2000/svg" width="100%" viewbox="0 0 160 40" fill="none"></svg>
    </div>
    <p data-wiggle-target class="btn-stop-motion__p">Stop Motion</p>
  </div>
</a>""",
        "css": """.btn-stop-motion {
  color: #131313;
  cursor: pointer;
  padding: .75em 1.5em .75em 1em;
  line-height: 1;
  text-decoration: none;
  display: inline-block;
  transition: 0.5s cubic-bezier(0.35, 1.75, 0.6, 1);
  transform: scale(1) rotate(0.001deg);
}

.btn-stop-motion:hover {
  transform: scale(1.05) rotate(-1deg);
}

@keyframes sprite {
  to {
    transform: translateX(-100%);
  }
}

[data-sprite] .btn-stop-motion__icon-svg {
  animation: sprite 0.45s steps(4, end) infinite;
}

@keyframes wiggle {
  from {
    transform: rotate(1deg);
  }
  to {
    transform: rotate(-1deg);
  }
}

[data-wiggle]:hover [data-wiggle-target] {
  animation: wiggle 0.3s steps(2, end) infinite;
}""",
        "js": "",
    },
}
