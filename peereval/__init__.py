"""PeerEval account service and static pages."""
