# backend/rentmaster/seed/demo_seed.py
"""
Starter portfolio used when the local store is empty.

Two properties in Niterói, their rooms, current tenants and the utility
and service suppliers. Transactions are generated from these by
rentmaster.domain.seed_generator.
"""
from __future__ import annotations

from ..schemas import PropertyIn, RoomIn, SupplierIn, TenantIn


PROPERTIES = [
    dict(id="p1", name="Casa Centro", type="Casa", address="Rua Almirante Teffe, XXX"),
    dict(id="p2", name="Apartamento Icarai", type="Apartamento", address="Rua Pereira da Silva, 18/201"),
]

ROOMS = [
    # Casa Centro
    dict(id="r1", propertyId="p1", number="C1", area=15, description="Quarto Fundos", isOccupied=True, tenantId="t1", price=700),
    dict(id="r2", propertyId="p1", number="C2", area=8, description="Quarto Interno", isOccupied=True, tenantId="t2", price=700),
    dict(id="r3", propertyId="p1", number="C3", area=20, description="Quarto Frente", isOccupied=True, tenantId="t3", price=850),
    dict(id="r4", propertyId="p1", number="C4", area=8, description="Quarto Pequeno", isOccupied=True, tenantId="t4", price=700),
    dict(id="r5", propertyId="p1", number="C5", area=5, description="Quarto Externo", isOccupied=True, tenantId="t5", price=700),
    # Apartamento Icarai
    dict(id="r7", propertyId="p2", number="I1", area=7, description="Quarto meia sala 1", isOccupied=True, tenantId="t6", price=890),
    dict(id="r8", propertyId="p2", number="I2", area=7, description="Quarto meia sala 2", isOccupied=True, tenantId="t7", price=900),
    dict(id="r9", propertyId="p2", number="I3", area=20, description="Quarto Central", isOccupied=True, tenantId="t8", price=1000),
    dict(id="r10", propertyId="p2", number="I4", area=8, description="Quarto Ultimo", isOccupied=True, tenantId="t9", price=1000),
    dict(id="r11", propertyId="p2", number="I5", area=12, description="Quarto Penultimo", isOccupied=True, tenantId="t10", price=850),
    dict(id="r12", propertyId="p2", number="I6", area=8, description="Quarto Externo", isOccupied=True, tenantId="t11", price=900),
    dict(id="r13", propertyId="p2", number="I7", area=8, description="Quarto Pequeno", isOccupied=False, price=750),
]

TENANTS = [
    dict(id="t1", name="Lia", nickname="Debora", cpf="123.456.789-00", profession="Engenheira", entryDate="2024-01-15", dueDay=8, roomId="r1"),
    dict(id="t2", name="Julia", cpf="234.567.890-11", profession="Designer", entryDate="2024-05-19", dueDay=17, roomId="r2"),
    dict(id="t3", name="Giórgia", cpf="345.678.901-22", profession="Advogada", entryDate="2024-06-24", dueDay=27, roomId="r3"),
    dict(id="t4", name="Yasmin", cpf="456.789.012-33", profession="Estudante", entryDate="2024-08-16", dueDay=10, roomId="r4"),
    dict(id="t5", name="Amanda", cpf="567.890.123-44", profession="Professor", entryDate="2024-10-09", dueDay=10, roomId="r5"),
    dict(id="t6", name="Jamile", cpf="678.901.234-55", profession="Arquiteta", entryDate="2024-02-06", dueDay=5, roomId="r7"),
    dict(id="t7", name="Tainá", cpf="789.012.345-66", profession="Analista", entryDate="2024-04-14", dueDay=5, roomId="r8"),
    dict(id="t8", name="Cristina", cpf="890.123.456-77", profession="Psicóloga", entryDate="2024-07-29", dueDay=20, roomId="r9"),
    dict(id="t9", name="Bruna", cpf="234.567.890-11", profession="Desenvolvedora", entryDate="2024-09-22", dueDay=25, roomId="r10"),
    dict(id="t10", name="Caroliny", cpf="345.678.901-22", profession="Veterinária", entryDate="2024-11-06", dueDay=10, roomId="r11"),
    dict(id="t11", name="Rafaella", cpf="456.789.012-33", profession="Publicitária", entryDate="2024-12-14", dueDay=5, roomId="r12"),
]

SUPPLIERS = [
    # Casa Centro (p1)
    dict(id="s1", name="Águas de Niterói - Centro", category="Utilidade", specialty="Água", propertyId="p1", accountNumber="123456-7", phone="0800-757-0400", dueDay=18, costType="variable", baseValue=470.00, frequency="Mensal"),
    dict(id="s2", name="IPTU - Centro", category="Utilidade", specialty="IPTU", propertyId="p1", accountNumber="25-243190", dueDay=10, costType="fixed", baseValue=99.90, frequency="Mensal"),
    dict(id="s3", name="Enel Rio - Centro", category="Utilidade", specialty="Energia", propertyId="p1", accountNumber="987654321-9", phone="0800-280-0120", dueDay=25, costType="variable", baseValue=500.00, frequency="Mensal"),
    dict(id="s5", name="Claro Fibra - Centro", category="Utilidade", specialty="Internet", propertyId="p1", accountNumber="000123-456", dueDay=25, costType="fixed", baseValue=69.17, frequency="Mensal"),
    # Apartamento Icarai (p2)
    dict(id="s4", name="Enel Rio - Icarai", category="Utilidade", specialty="Energia", propertyId="p2", accountNumber="554433221-34", phone="0800-280-0120", dueDay=25, costType="variable", baseValue=170.00, frequency="Mensal"),
    dict(id="s6", name="PredialNet - Icarai", category="Utilidade", specialty="Internet", propertyId="p2", accountNumber="123-4579", dueDay=25, costType="fixed", baseValue=114.89, frequency="Mensal"),
    dict(id="s7a", name="Naturgy - Icarai", category="Utilidade", specialty="Gás", propertyId="p2", accountNumber="998877-00", phone="0800-024-7777", dueDay=25, costType="variable", baseValue=160.00, frequency="Mensal"),
    # Event-based professionals: no due day, no base value
    dict(id="s8a", name="Ismael", category="Profissional", specialty="Marceneiro", costType="variable", frequency="Eventual"),
    dict(id="s9", name="Francisco", category="Profissional", specialty="Hidráulica", costType="variable", frequency="Eventual"),
    dict(id="s10", name="Carlos", category="Profissional", specialty="Elétrica", costType="variable", frequency="Eventual"),
    dict(id="s11", name="João", category="Profissional", specialty="Pedreiro", costType="variable", frequency="Eventual"),
]


def demo_properties() -> list[PropertyIn]:
    return [PropertyIn.model_validate(d) for d in PROPERTIES]


def demo_rooms() -> list[RoomIn]:
    return [RoomIn.model_validate(d) for d in ROOMS]


def demo_tenants() -> list[TenantIn]:
    return [TenantIn.model_validate(d) for d in TENANTS]


def demo_suppliers() -> list[SupplierIn]:
    return [SupplierIn.model_validate(d) for d in SUPPLIERS]
