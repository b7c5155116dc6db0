# Schemas package init: request bodies, response shapes and envelopes for the API
