"""
Request records for each carrier, named exactly as the carrier's wire
contract names them. `utils.soap.build_envelope` and `dataclasses.asdict`
turn them into SOAP bodies and JSON payloads.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional


# Aras Kargo


@dataclass
class ArasCustomerInfo:
    CustomerCode: str = ""
    UserName: str = ""
    Password: str = ""


@dataclass
class ArasAddressInfo:
    Address: str = ""
    AddressId: str = ""
    CityName: str = ""
    MobilePhone: str = ""
    Name: str = ""
    TaxNumber: str = ""
    TaxOffice: str = ""
    TownName: str = ""


@dataclass
class ArasOrderModel:
    ConfigurationId: str = ""
    IntegrationCode: str = ""
    InvoiceNumber: str = ""
    TradingWaybillNumber: str = ""
    LovPayOrType: str = "1"
    MainServiceCode: str = "STNK"
    ReceiverAddressInfo: ArasAddressInfo = field(default_factory=ArasAddressInfo)
    SenderAddressInfo: ArasAddressInfo = field(default_factory=ArasAddressInfo)


@dataclass
class ArasSaveOrderRequest:
    customerInfo: ArasCustomerInfo = field(default_factory=ArasCustomerInfo)
    model: ArasOrderModel = field(default_factory=ArasOrderModel)


@dataclass
class ArasDeleteOrderRequest:
    orderCode: str = ""
    customerInfo: ArasCustomerInfo = field(default_factory=ArasCustomerInfo)


@dataclass
class ArasQueryRequest:
    # both are XML documents sent as strings
    loginInfo: str = ""
    queryInfo: str = ""


# MNG Kargo


@dataclass
class MngParcel:
    Kg: int = 1
    Desi: int = 1
    Adet: int = 1
    Icerik: str = "Ürün"


@dataclass
class MngSender:
    pGonMusteriAdi: str = ""
    pGonIlAdi: str = ""
    pGonilceAdi: str = ""
    pGonAdresText: str = ""
    pGonTelCep: str = ""


@dataclass
class MngReceiver:
    pAliciMusteriAdi: str = ""
    pAliciIlAdi: str = ""
    pAliciilceAdi: str = ""
    pAliciAdresText: str = ""
    pAliciTelCep: str = ""


@dataclass
class MngOrderRequest:
    pKullaniciAdi: str = ""
    pSifre: str = ""
    pSiparisNo: str = ""
    pBarkodText: str = ""
    pIrsaliyeNo: str = ""
    pUrunBedeli: int = 0
    pKapidaOdeme: str = "Mal_Bedeli_Tahsil_Edilmesin"
    pOdemeSekli: str = "Gonderici_Odeyecek"
    pTeslimSekli: str = "Adrese_Teslim"
    pKargoCinsi: str = "Koli"
    pGonSms: str = "SMSGonderilmesin"
    pAliciSms: str = "SMSGonderilmesin"
    pKapidaTahsilat: str = "Mal_Bedeli_Tahsil_Edilmesin"
    pAciklama: str = ""
    pGonderiParcaList: Dict[str, List[MngParcel]] = field(default_factory=dict)
    pGonderenMusteri: MngSender = field(default_factory=MngSender)
    pAliciMusteri: MngReceiver = field(default_factory=MngReceiver)


@dataclass
class MngCancelRequest:
    pKullaniciAdi: str = ""
    pSifre: str = ""
    pSiparisNo: str = ""


@dataclass
class MngTrackRequest:
    pRfSipGnMusteriNo: str = ""
    pRfSipGnMusteriSifre: str = ""
    pChBarkod: str = ""
    pChFaturaSeri: str = ""
    pChFaturaNo: str = ""
    pNmGonderiNo: str = ""
    pChSiparisNo: str = ""
    pGonderiCikisTarihi: str = ""


# PTT Kargo


@dataclass
class PttSenderInfo:
    gonderici_adi: str = ""
    gonderici_adresi: str = ""
    gonderici_email: str = ""
    gonderici_il_ad: str = ""
    gonderici_ilce_ad: str = ""
    gonderici_sms: str = ""
    gonderici_telefonu: str = ""


@dataclass
class PttShipmentLine:
    aAdres: str = ""
    agirlik: int = 1
    aliciAdi: str = ""
    aliciIlAdi: str = ""
    aliciIlceAdi: str = ""
    aliciSms: str = ""
    aliciTel: str = ""
    barkodNo: str = ""
    boy: int = 1
    desi: float = 1
    en: int = 1
    gondericibilgi: PttSenderInfo = field(default_factory=PttSenderInfo)
    musteriReferansNo: str = ""
    yukseklik: int = 1


@dataclass
class PttAcceptInput:
    dongu: List[PttShipmentLine] = field(default_factory=list)
    dosyaAdi: str = ""
    gonderiTip: str = "NORMAL"
    gonderiTur: str = "KARGO"
    kullanici: str = ""
    musteriId: int = 0
    sifre: str = ""


@dataclass
class PttDeleteInput:
    barcode: str = ""
    dosyaAdi: str = ""
    musteriId: int = 0
    sifre: str = ""


@dataclass
class PttQueryInput:
    barkod: str = ""
    kullanici: str = ""
    sifre: str = ""


# Yurtici Kargo


@dataclass
class YurtIciCargoData:
    ngiCargoKey: str = ""
    cargoType: int = 2
    cargoDesi: str = "1"
    cargoWeight: str = "1"
    cargoCount: int = 1


@dataclass
class YurtIciCodData:
    ttInvoiceAmount: str = ""
    dcSelectedCredit: str = ""


@dataclass
class YurtIciShipmentData:
    ngiDocumentKey: str = ""
    cargoType: int = 2
    totalCargoCount: int = 1
    totalDesi: str = "1"
    totalWeight: str = "1"
    personGiver: str = ""
    productCode: str = "STA"
    docCargoDataArray: YurtIciCargoData = field(default_factory=YurtIciCargoData)
    codData: YurtIciCodData = field(default_factory=YurtIciCodData)


@dataclass
class YurtIciSenderAddress:
    senderCustName: str = ""
    senderAddress: str = ""
    cityId: str = ""
    townName: str = ""
    senderPhone: str = ""


@dataclass
class YurtIciConsigneeAddress:
    consigneeCustName: str = ""
    consigneeAddress: str = ""
    cityId: str = ""
    townName: str = ""
    consigneeMobilePhone: str = ""


@dataclass
class YurtIciPayerData:
    invCustId: str = ""


@dataclass
class YurtIciCreateRequest:
    wsUserName: str = ""
    wsPassword: str = ""
    wsUserLanguage: str = "TR"
    shipmentData: YurtIciShipmentData = field(default_factory=YurtIciShipmentData)
    XSenderCustAddress: YurtIciSenderAddress = field(default_factory=YurtIciSenderAddress)
    XConsigneeCustAddress: YurtIciConsigneeAddress = field(
        default_factory=YurtIciConsigneeAddress
    )
    payerCustData: YurtIciPayerData = field(default_factory=YurtIciPayerData)


@dataclass
class YurtIciCancelRequest:
    wsUserName: str = ""
    wsPassword: str = ""
    wsUserLanguage: str = "TR"
    ngiCargoKey: str = ""
    ngiDocumentKey: str = ""
    cancellationDescription: str = "Müşteri talebi ile iptal edildi"


@dataclass
class YurtIciCustParams:
    invCustIdArray: str = ""


@dataclass
class YurtIciTrackRequest:
    userName: str = ""
    password: str = ""
    language: str = "tr"
    custParamsVO: YurtIciCustParams = field(default_factory=YurtIciCustParams)
    fieldName: int = 53
    fieldValueArray: str = ""
    withCargoLifecycle: int = 1


# Navlungo


@dataclass
class NavlungoLoginRequest:
    api_key: str = ""
    api_secret: str = ""


@dataclass
class NavlungoSender:
    name: str = ""
    address: str = ""
    city: str = ""
    district: str = ""
    phone: str = ""
    email: str = ""


@dataclass
class NavlungoReceiver:
    name: str = ""
    address: str = ""
    city: str = ""
    district: str = ""
    phone: str = ""


@dataclass
class NavlungoParcel:
    weight: float = 1000  # grams
    deci: float = 1
    description: str = "Gönderi"


@dataclass
class NavlungoPostRequest:
    carrier_id: str = ""
    sender: NavlungoSender = field(default_factory=NavlungoSender)
    receiver: NavlungoReceiver = field(default_factory=NavlungoReceiver)
    parcels: List[NavlungoParcel] = field(default_factory=list)
    payment_type: str = "sender_pays"
    invoice_number: str = ""
    order_code: Optional[str] = ""


@dataclass
class NavlungoCancelRequest:
    reason: str = "Müşteri talebi ile iptal edildi"
