"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from svg2code.engine.context import GroupContext, Icon


# Sample vector drawables

ADD_XML = '''<vector xmlns:android="http://schemas.android.com/apk/res/android"
    android:width="24dp"
    android:height="24dp"
    android:viewportWidth="24"
    android:viewportHeight="24">
  <path
      android:fillColor="#FF000000"
      android:pathData="M19,13h-6v6h-2v-6H5v-2h6V5h2v6h6v2z"/>
</vector>'''

STROKED_XML = '''<vector xmlns:android="http://schemas.android.com/apk/res/android"
    android:width="24dp"
    android:height="24dp"
    android:viewportWidth="24"
    android:viewportHeight="24">
  <path
      android:name="check"
      android:strokeColor="#1E88E5"
      android:strokeWidth="2"
      android:strokeLineCap="round"
      android:strokeLineJoin="round"
      android:strokeAlpha="0.5"
      android:fillType="evenOdd"
      android:pathData="M4,12l5,5L20,6"/>
</vector>'''

GROUPED_XML = '''<vector xmlns:android="http://schemas.android.com/apk/res/android"
    android:width="48dp"
    android:height="48dp"
    android:viewportWidth="24"
    android:viewportHeight="24">
  <group android:name="rotated" android:rotation="45" android:pivotX="12" android:pivotY="12">
    <path android:fillColor="#F00" android:pathData="M8,8h8v8h-8z"/>
    <group android:translateX="2">
      <path android:fillColor="#00FF00" android:pathData="M0,0L2,0L2,2Z"/>
    </group>
  </group>
  <clip-path android:pathData="M0,0h24v24h-24z"/>
  <path android:fillColor="#0000FF" android:pathData="M1,1 a2,2 0 1,0 4,0"/>
</vector>'''

GRADIENT_XML = '''<vector xmlns:android="http://schemas.android.com/apk/res/android"
    xmlns:aapt="http://schemas.android.com/aapt"
    android:width="24dp"
    android:height="24dp"
    android:viewportWidth="24"
    android:viewportHeight="24">
  <path android:pathData="M0,0h24v24h-24z">
    <aapt:attr name="android:fillColor">
      <gradient
          android:type="linear"
          android:startX="0"
          android:startY="0"
          android:endX="24"
          android:endY="24">
        <item android:offset="0" android:color="#FFFF0000"/>
        <item android:offset="1" android:color="#FF0000FF"/>
      </gradient>
    </aapt:attr>
  </path>
</vector>'''

RADIAL_XML = '''<vector xmlns:android="http://schemas.android.com/apk/res/android"
    xmlns:aapt="http://schemas.android.com/aapt"
    android:width="24dp"
    android:height="24dp"
    android:viewportWidth="24"
    android:viewportHeight="24">
  <path android:pathData="M0,0h24v24h-24z">
    <aapt:attr name="android:fillColor">
      <gradient
          android:type="radial"
          android:centerX="12"
          android:centerY="12"
          android:gradientRadius="12"
          android:startColor="#FFFFFF"
          android:centerColor="#808080"
          android:endColor="#000000"/>
    </aapt:attr>
  </path>
</vector>'''

COLOR_REF_XML = '''<vector xmlns:android="http://schemas.android.com/apk/res/android"
    android:width="24dp"
    android:height="24dp"
    android:viewportWidth="24"
    android:viewportHeight="24">
  <path android:fillColor="@color/brand" android:pathData="M0,0h24v24h-24z"/>
</vector>'''

COLORS_RESOURCES_XML = '''<?xml version="1.0" encoding="utf-8"?>
<resources>
    <color name="brand">#FF6200EE</color>
    <color name="alias">@color/brand</color>
</resources>'''


# Sample SVGs

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

HOME_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <path d="M15 21v-8a1 1 0 0 0-1-1h-4a1 1 0 0 0-1 1v8"/>
  <path d="M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999A2 2 0 0 1 21 10v9a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"/>
</svg>'''

FILLED_RECT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <rect x="10" y="10" width="80" height="80" fill="#4ECDC4"/>
  <circle cx="50" cy="50" r="20" fill="#FF6B6B"/>
</svg>'''

GRADIENT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="24" height="24" viewBox="0 0 24 24">
  <defs>
    <linearGradient id="base">
      <stop offset="0" stop-color="#FF0000"/>
      <stop offset="100%" style="stop-color:#0000FF;stop-opacity:0.5"/>
    </linearGradient>
    <linearGradient id="diag" xlink:href="#base" x1="0" y1="0" x2="1" y2="1"/>
  </defs>
  <rect x="2" y="2" width="20" height="20" fill="url(#diag)"/>
</svg>'''

TRANSFORMED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24">
  <g transform="translate(12 12) rotate(90)" fill="#00FF00" opacity="0.5">
    <path d="M0,0L4,0L4,4z"/>
  </g>
  <g transform="skewX(45)">
    <line x1="0" y1="0" x2="0" y2="10" stroke="black"/>
  </g>
  <text x="0" y="0">ignored</text>
</svg>'''

BROKEN_XML = "<vector><path"


@pytest.fixture
def add_icon() -> Icon:
    return Icon(name="Add", original_file_name="add.xml", raw_xml=ADD_XML)


@pytest.fixture
def icons_context() -> GroupContext:
    return GroupContext.for_root("Icons", "com.example.icons")


@pytest.fixture
def icon_tree(tmp_path: Path) -> Path:
    """root/{a.svg, sub/{b.svg}}"""
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.svg").write_text(CIRCLE_SVG)
    (root / "sub" / "b.svg").write_text(HOME_SVG)
    return root
