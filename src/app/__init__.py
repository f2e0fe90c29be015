"""App - coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: fluxos end-to-end (webhook → pipeline → CAPI)
- use_cases/: casos de uso (inputs/outputs, sem IO direto)
- domain/: eventos de conversão, payloads Shopify, conexão Meta
- services/: hashing de PII, chaves de dedup, construção de eventos
- infra/: implementações concretas de IO (stores)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas em logs estruturados

Padrão: app executa; api adapta; utils apoia.
"""
