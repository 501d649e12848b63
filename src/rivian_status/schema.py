"""Minimal GraphQL schema for the read-only operations, used by the DSL."""

RIVIAN_SCHEMA = """
type Query {
  currentUser: User
  getVehicle(id: String!): Vehicle
  getCompletedSessionSummaries: [CompletedSessionSummary]
}

type Mutation {
  createCsrfToken: CreateCSRFTokenResponse
  login(email: String!, password: String!): LoginResponse
  loginWithOTP(email: String!, otpCode: String!, otpToken: String!): LoginResponse
}

type CreateCSRFTokenResponse {
  csrfToken: String!
  appSessionToken: String!
}

union LoginResponse = MobileLoginResponse | MobileMFALoginResponse

type MobileLoginResponse {
  accessToken: String!
  refreshToken: String!
  userSessionToken: String!
}

type MobileMFALoginResponse {
  otpToken: String!
}

type User {
  id: String!
  firstName: String
  lastName: String
  email: String
  vehicles: [UserVehicle]
  registrationChannels: [RegistrationChannel]
}

type RegistrationChannel {
  type: String
}

type UserVehicle {
  id: String!
  vin: String!
  name: String
  state: String
  createdAt: String
  updatedAt: String
  roles: [String]
  vas: UserVehicleAccess
  vehicle: VehicleDetails
}

type UserVehicleAccess {
  vasVehicleId: String
  vehiclePublicKey: String
}

type VehicleDetails {
  id: String
  vin: String
  modelYear: Int
  make: String
  model: String
  expectedBuildDate: String
  plannedBuildDate: String
  otaEarlyAccessStatus: String
  currentOTAUpdateDetails: OTAUpdateDetails
  availableOTAUpdateDetails: OTAUpdateDetails
  vehicleState: VehicleDetailsState
}

type VehicleDetailsState {
  supportedFeatures: [SupportedFeature]
}

type SupportedFeature {
  name: String
  status: String
}

type OTAUpdateDetails {
  url: String
  version: String
  locale: String
}

type Vehicle {
  id: String!
  vin: String
  invitedUsers: [InvitedUser]
  chargingSchedules: [ChargingSchedule]
  availableOTAUpdateDetails: OTAUpdateDetails
  currentOTAUpdateDetails: OTAUpdateDetails
}

union InvitedUser = ProvisionedUser | UnprovisionedUser

type ProvisionedUser {
  firstName: String
  lastName: String
  email: String
  roles: [String]
  userId: String
  devices: [UserDevice]
}

type UnprovisionedUser {
  email: String
  inviteId: String
  status: String
}

type UserDevice {
  type: String
  mappedIdentityId: String
  id: String
  hrid: String
  deviceName: String
  isPaired: Boolean
  isEnabled: Boolean
}

type ChargingSchedule {
  startTime: Int
  duration: Int
  location: GeoCoordinate
  amperage: Int
  enabled: Boolean
  weekDays: [String]
}

type GeoCoordinate {
  latitude: Float!
  longitude: Float!
}

type CompletedSessionSummary {
  chargerType: String
  currencyCode: String
  paidTotal: Float
  startInstant: String
  endInstant: String
  totalEnergyKwh: Float
  rangeAddedKm: Float
  city: String
  transactionId: String
  vehicleId: String
  vehicleName: String
  vendor: String
  isRoamingNetwork: Boolean
  isPublic: Boolean
  isHomeCharger: Boolean
}
"""
