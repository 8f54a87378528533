# src/atlas_config/core/__init__.py
"""
Core do Atlas Config.

Este pacote contém a implementação canônica do loader: construção da árvore
de configuração, navegação com diagnóstico e decodificação tipada.

Componentes principais:
    - source       → Source Tree Builder (substituição, parse, merge, hashing)
    - cursor       → Path Resolver (`ConfigCursor`)
    - errors       → catálogo de falhas de decodificação (`DecodeFailure`)
    - types        → `DecodeResult` e `CannotConvert`
    - decoding     → decoders, registros, tipos soma e `DecoderRegistry`
    - load_context → eventos e warnings de um carregamento

Princípios fundamentais:
    - Nenhuma decisão silenciosa: todo decoder é explícito
    - Decodificação sem efeitos colaterais e segura entre threads
"""
