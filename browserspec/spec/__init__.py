"""Browser behaviour specs and the HTML fixtures they navigate to."""
