''' Wrapper module around :mod:`msgspec` to provide the equivalent of
    :func:`json.loads` and :func:`json.dumps`. Both directions operate on
    bytes; :func:`dumps` also accepts :class:`msgspec.Struct` instances,
    which is how every outbound message is represented.
'''

import msgspec


encoder = msgspec.json.Encoder()
decoder = msgspec.json.Decoder()

dumps = encoder.encode
loads = decoder.decode

DecodeError = msgspec.DecodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
