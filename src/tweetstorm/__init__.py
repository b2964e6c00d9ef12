"""tweetstorm - split prose into threads of length-bounded tweets."""

__version__ = "0.1.0"
