"""Extract Dart string literals into ARB resource files and translate them."""
